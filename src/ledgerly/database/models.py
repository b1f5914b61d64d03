"""SQLAlchemy models for the ledgerly database."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    Date,
    Numeric,
    Boolean,
    Table,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


transaction_tags = Table(
    "transaction_tags",
    Base.metadata,
    Column(
        "transaction_id",
        String,
        ForeignKey("transactions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Group(Base):
    """Category group model."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)

    # Relationships
    categories = relationship("Category", back_populates="group")


class Category(Base):
    """Category model; every category belongs to exactly one group."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)

    # Relationships
    group = relationship("Group", back_populates="categories")
    transactions = relationship("Transaction", back_populates="category")


class Tag(Base):
    """Tag model."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)

    # Relationships
    transactions = relationship("Transaction", secondary=transaction_tags, back_populates="tags")


class Transaction(Base):
    """Transaction model.

    The group is reached through ``category``; it is not stored here.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    parent_id = Column(String, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    original_description = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    is_split = Column(Boolean, default=False, nullable=False)
    account_name = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    source = Column(String, nullable=True)
    quantity = Column(Integer, default=1, nullable=True)
    link = Column(String, nullable=True)
    location = Column(String, nullable=True)

    # Relationships
    parent = relationship("Transaction", remote_side=[id], back_populates="children")
    children = relationship("Transaction", back_populates="parent", passive_deletes=True)
    category = relationship("Category", back_populates="transactions")
    tags = relationship(
        "Tag", secondary=transaction_tags, back_populates="transactions", passive_deletes=True
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory and make sure the schema exists."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
