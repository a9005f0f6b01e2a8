"""Shared primary-key helpers for the profile and user repositories."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from devconnect.db import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Row access by primary key; subclasses set ``model``."""

    model: type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, pk: int) -> ModelT | None:
        return self.session.get(self.model, pk)

    def create(self, **values) -> ModelT:
        """Add a new row and flush it so its primary key is assigned."""
        row = self.model(**values)
        self.session.add(row)
        self.session.flush()
        return row

    def delete(self, pk: int) -> bool:
        """Delete the row with ``pk``. Returns False when there is none."""
        row = self.get_by_id(pk)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True
