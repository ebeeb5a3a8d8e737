import logging

from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    """Key-based access to one mapped class through an injected session."""

    model = None

    def __init__(self, session):
        self.session = session

    def find_all(self):
        return self.session.query(self.model).order_by(self.model.id).all()

    def find_by_id(self, entity_id):
        if entity_id is None:
            return None
        return self.session.get(self.model, entity_id)

    def save(self, entity):
        self.session.add(entity)
        self._commit()
        return entity

    def delete_by_id(self, entity_id):
        entity = self.find_by_id(entity_id)
        if entity is None:
            return
        self.session.delete(entity)
        self._commit()

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Commit failed for %s, rolling back", self.model.__name__)
            self.session.rollback()
            raise
