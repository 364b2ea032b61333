from justask.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = ["SQLAlchemyUnitOfWork", "SQLAlchemyReadOnlyUnitOfWork"]
