pytest_plugins = ["resops.testing.fixtures"]
