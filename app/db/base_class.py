# /app/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class CustomBase:
    # Table names default to the pluralized, lower-cased class name
    # (User -> users, Generation -> generations). Models override
    # __tablename__ where plain pluralization reads badly.
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"


Base = declarative_base(cls=CustomBase)
