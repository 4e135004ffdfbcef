# /grading_app/db/base_class.py

from sqlalchemy.orm import as_declarative, declared_attr


@as_declarative()
class Base:
    """
    Declarative base for every ORM model.

    Models that do not set `__tablename__` explicitly get the pluralised,
    lower-cased class name (e.g. `Question` -> `questions`).
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"
