from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from fixture_insights.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def get(self, id_: Any) -> ModelT | None:
        return self.session.get(self.model, id_)

    def where(self, *predicates: ColumnElement[bool]) -> list[ModelT]:
        stmt = select(self.model).where(*predicates)
        return list(self.session.execute(stmt).scalars().all())

    def all(self) -> list[ModelT]:
        return list(self.session.execute(select(self.model)).scalars().all())
