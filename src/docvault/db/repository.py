from __future__ import annotations

from typing import Any, Generic, Optional, Sequence, Type, TypeVar, cast

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class Repository(Generic[T]):
    """Thin async CRUD helper over one mapped class.

    There is no update: rows are written once and later deleted.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    async def get(self, id: Any) -> Optional[T]:
        return await self.session.get(self.model, id)

    async def list(self, *, order_by: Sequence[Any] = ()) -> Sequence[T]:
        stmt = select(self.model)
        if order_by:
            stmt = stmt.order_by(*order_by)
        return (await self.session.execute(stmt)).scalars().all()

    async def create(self, **data) -> T:
        obj = self.model(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def delete(self, id: Any) -> int:
        cond = cast(Any, self.model).id == id
        res = await self.session.execute(delete(self.model).where(cond))
        return int(res.rowcount or 0)
