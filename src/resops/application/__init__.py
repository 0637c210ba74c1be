"""Application layer – filter model, paging, loaders, pickers and saved filters."""
