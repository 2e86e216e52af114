"""SQLAlchemy ORM models for the loyalty card database"""
from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Bumped whenever the table layout changes; stored in PRAGMA user_version
SCHEMA_VERSION = 2


class CardORM(Base):
    """SQLAlchemy ORM model for the cards table"""
    __tablename__ = 'LoyaltyCards'

    # Primary key - derived "format:data" identity, never assigned by the store
    id = Column('ID', String, primary_key=True, key='id')

    # Display names are unique independently of the derived id
    name = Column('Name', String, nullable=False, unique=True, key='name')

    def __repr__(self):
        return f"<CardORM(id='{self.id}', name='{self.name}')>"


class CardTagORM(Base):
    """SQLAlchemy ORM model for card-to-tag memberships"""
    __tablename__ = 'LoyaltyCardTags'

    # Composite primary key doubles as the (CardID, Tag) uniqueness constraint.
    # The cascade is declared for the schema but performed by CardStore itself.
    card_id = Column(
        'CardID',
        String,
        ForeignKey('LoyaltyCards.id', ondelete='CASCADE'),
        primary_key=True,
        key='card_id'
    )
    tag = Column('Tag', String, primary_key=True, key='tag')

    __table_args__ = (
        Index('idx_tag', tag),
    )

    def __repr__(self):
        return f"<CardTagORM(card_id='{self.card_id}', tag='{self.tag}')>"
