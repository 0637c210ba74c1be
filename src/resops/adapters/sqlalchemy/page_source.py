"""SQLAlchemy adapter – SqlAlchemyPageSource.

Translates a :class:`PageRequest` into one ``SELECT``: equality for
single-choice filters, ``IN`` for multi-choice filters, case-insensitive
``LIKE`` over the search columns, ``ORDER BY`` the sort column (primary key
as tie-breaker), ``OFFSET (page-1)*limit`` and ``LIMIT limit``.  No count
query runs per page; ``has_more`` is whether the page came back full.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, inspect, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from resops.application.filters import FieldKind
from resops.application.pagination import PageQuery, PageRequest, PageResponse, SortDirection
from resops.kernel.errors import InfrastructureError, ValidationError
from resops.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)

_TRUE_TOKENS = ("1", "true", "yes", "on")


def _coerce(column: Any, value: str) -> Any:
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if python_type is bool:
        return value.lower() in _TRUE_TOKENS
    if python_type is str:
        return value
    try:
        return python_type(value)
    except (TypeError, ValueError):
        return value


class SqlAlchemyPageSource(Generic[T]):
    """PageFetcher over a mapped SQLAlchemy model."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        model: type[Any],
        *,
        search_columns: Sequence[str] = ("name",),
        row_fn: Callable[[Any], T] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._model = model
        self._search_columns = tuple(search_columns)
        self._row_fn: Callable[[Any], T] = row_fn or (lambda row: row)
        self._primary_key = list(inspect(model).primary_key)

    def _column(self, name: str) -> Any:
        column = getattr(self._model, name, None)
        if column is None:
            raise ValidationError(f"{self._model.__name__} has no column '{name}'", field=name)
        return column

    def statement(self, query: PageQuery) -> Select[Any]:
        stmt = select(self._model)
        for key, value in query.scope:
            column = self._column(key)
            stmt = stmt.where(column == _coerce(column, value))
        if query.filters is not None:
            for f in query.filters.schema:
                value = query.filters[f.name]
                if f.kind is FieldKind.SINGLE and value is not None:
                    column = self._column(f.column_name)
                    stmt = stmt.where(column == _coerce(column, value))
                elif f.kind is FieldKind.MULTI and value:
                    column = self._column(f.column_name)
                    stmt = stmt.where(column.in_(sorted(_coerce(column, v) for v in value)))
        term = query.search_text
        if term:
            stmt = stmt.where(
                or_(*(self._column(c).icontains(term, autoescape=True) for c in self._search_columns))
            )
        if query.sort is not None:
            column = self._column(query.sort.field)
            stmt = stmt.order_by(column.desc() if query.sort.direction is SortDirection.DESC else column.asc())
        return stmt.order_by(*self._primary_key)

    async def fetch(self, request: PageRequest) -> PageResponse[T]:
        stmt = self.statement(request.query).offset(request.offset).limit(request.limit)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"Page query on {self._model.__name__} failed", cause=exc) from exc
        _log.debug(
            "sqlalchemy.page_fetched",
            model=self._model.__name__,
            page=request.page,
            rows=len(rows),
        )
        return PageResponse(data=[self._row_fn(r) for r in rows], has_more=len(rows) == request.limit)

    async def count(self, query: PageQuery) -> int:
        """Total matches for *query*; a separate, more expensive operation."""
        subquery = self.statement(query).order_by(None).subquery()
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count()).select_from(subquery))
                return int(result.scalar_one())
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"Count query on {self._model.__name__} failed", cause=exc) from exc


__all__ = ["SqlAlchemyPageSource"]
