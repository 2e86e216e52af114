"""SQLAlchemy-based store for loyalty cards and their tags"""
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import settings
from ..exceptions import StorageError
from ..interfaces.store import ICardStore
from ..models.card import LoyaltyCard, make_card_id, parse_card_id
from ..models.card_orm import Base, CardORM, CardTagORM, SCHEMA_VERSION
from ..models.converters import orm_list_to_cards, orm_to_card

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


class CardStore(ICardStore):
    """
    SQLite store for loyalty cards and tag memberships.

    Each public method is one unit of work: it opens a session, runs a
    single transaction and closes the session before returning. All of
    them run under one re-entrant lock, so multi-step operations (cascade
    delete, tag rename, card rename) are never seen half done.
    """

    def __init__(self, db_path: Optional[str] = None, echo: Optional[bool] = None):
        """
        Open (and if needed create) the card database

        Args:
            db_path: Path to the SQLite file, or ":memory:" (defaults to settings)
            echo: Log SQL statements (defaults to settings)
        """
        # Public: Database path
        self.db_path = db_path or settings.database_path

        # Private: engine, session factory and the critical section
        self._lock = threading.RLock()
        self._engine = self._create_engine(echo if echo is not None else settings.echo_sql)
        self._SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self._engine
        )

        self.initialize_schema()

    def _create_engine(self, echo: bool):
        if self.db_path == MEMORY_DB:
            # One shared connection, otherwise every session sees an empty database
            return create_engine(
                "sqlite://",
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool
            )

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            f"sqlite:///{self.db_path}",
            echo=echo,
            connect_args={"check_same_thread": False}
        )

    def initialize_schema(self) -> None:
        """Create tables if missing; rebuild them if the stored schema version differs"""
        try:
            with self._lock, self._engine.begin() as conn:
                version = conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
                if version and version != SCHEMA_VERSION:
                    # No migrations: older layouts are dropped and recreated
                    logger.warning(
                        f"Schema version {version} does not match {SCHEMA_VERSION}; "
                        f"dropping and recreating tables in {self.db_path}"
                    )
                    Base.metadata.drop_all(bind=conn)

                for table in Base.metadata.sorted_tables:
                    logger.info(f"Creating table '{table.name}' if missing")
                Base.metadata.create_all(bind=conn)
                conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
        except SQLAlchemyError as e:
            raise StorageError(f"Could not initialize schema in {self.db_path}") from e

    def close(self) -> None:
        """Release the engine and its connections"""
        self._engine.dispose()
        logger.info(f"Closed card store: {self.db_path}")

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """
        Run one unit of work in its own session and transaction.

        IntegrityError is re-raised untouched so callers can turn it into a
        False result; any other SQLAlchemy error becomes a StorageError.
        """
        with self._lock:
            session = self._SessionLocal()
            try:
                yield session
                session.commit()
            except IntegrityError:
                session.rollback()
                raise
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Storage failure in {self.db_path}: {e}")
                raise StorageError(str(e)) from e
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    # Cards

    def add_card(self, name: str, format: str, data: str) -> bool:
        card_id = make_card_id(format, data)
        logger.info(f"Creating card: {card_id} ({name})")
        try:
            with self._transaction() as session:
                session.add(CardORM(id=card_id, name=name))
        except IntegrityError:
            logger.info(f"Card not created, id or name already in use: {card_id} ({name})")
            return False
        return True

    def insert_card(self, card: Optional[LoyaltyCard]) -> bool:
        """Add a card from a LoyaltyCard value"""
        if card is None:
            return False
        return self.add_card(card.name, card.format, card.data)

    def delete_card(self, format: str, data: str) -> bool:
        card_id = make_card_id(format, data)
        logger.info(f"Deleting card: {card_id}")
        with self._transaction() as session:
            session.execute(delete(CardTagORM).where(CardTagORM.card_id == card_id))
            result = session.execute(delete(CardORM).where(CardORM.id == card_id))
            return result.rowcount > 0

    def remove_card(self, card: Optional[LoyaltyCard]) -> bool:
        """Delete the stored card a LoyaltyCard value refers to"""
        if card is None:
            return False
        return self.delete_card(card.format, card.data)

    def rename_card(self, format: str, data: str, new_name: str) -> bool:
        """
        Rename a card by deleting it and inserting it again under the new name.

        The card's tags are re-added in the same transaction. If the new name
        is already taken nothing changes.

        Args:
            format: Barcode format of the card
            data: Barcode payload of the card
            new_name: New display name

        Returns:
            True if the card now has the new name
        """
        if not new_name:
            return False

        card_id = make_card_id(format, data)
        try:
            with self._transaction() as session:
                old_name = session.execute(
                    select(CardORM.name).where(CardORM.id == card_id)
                ).scalar_one_or_none()
                if old_name is None:
                    return False
                if old_name == new_name:
                    return True

                tags = session.execute(
                    select(CardTagORM.tag).where(CardTagORM.card_id == card_id)
                ).scalars().all()

                session.execute(delete(CardTagORM).where(CardTagORM.card_id == card_id))
                session.execute(delete(CardORM).where(CardORM.id == card_id))
                session.add(CardORM(id=card_id, name=new_name))
                session.add_all([CardTagORM(card_id=card_id, tag=tag) for tag in tags])
        except IntegrityError:
            logger.info(f"Card {card_id} not renamed, name already in use: {new_name}")
            return False

        logger.info(f"Renamed card {card_id}: '{old_name}' -> '{new_name}' ({len(tags)} tags kept)")
        return True

    def get_card(self, name: str) -> Optional[LoyaltyCard]:
        """
        Get a card by its (user-supplied) name

        Args:
            name: Exact display name

        Returns:
            LoyaltyCard, or None if absent or stored with a malformed id
        """
        with self._transaction() as session:
            card_orm = session.execute(
                select(CardORM).where(CardORM.name == name)
            ).scalar_one_or_none()
            if card_orm is None:
                return None
            return orm_to_card(card_orm)

    def get_card_by_id(self, card_id: str) -> Optional[LoyaltyCard]:
        """Get a card by its derived "format:data" id"""
        with self._transaction() as session:
            card_orm = session.get(CardORM, card_id)
            if card_orm is None:
                return None
            return orm_to_card(card_orm)

    def get_all_cards(self) -> List[LoyaltyCard]:
        with self._transaction() as session:
            cards_orm = session.execute(
                select(CardORM).order_by(CardORM.name)
            ).scalars().all()
            return orm_list_to_cards(cards_orm)

    def card_count(self) -> int:
        """Get total number of cards in the store"""
        with self._transaction() as session:
            return session.execute(select(func.count()).select_from(CardORM)).scalar() or 0

    # Tags

    def add_tag(self, format: str, data: str, tag: str) -> bool:
        if not tag:
            return False

        card_id = make_card_id(format, data)
        try:
            with self._transaction() as session:
                if session.get(CardORM, card_id) is None:
                    logger.warning(f"Not tagging unknown card {card_id} with '{tag}'")
                    return False
                session.add(CardTagORM(card_id=card_id, tag=tag))
        except IntegrityError:
            logger.debug(f"Card {card_id} already tagged '{tag}'")
            return False
        return True

    def tag_card(self, card: LoyaltyCard, tag: str) -> bool:
        """Add a LoyaltyCard value to a group"""
        return self.add_tag(card.format, card.data, tag)

    def remove_tag(self, format: str, data: str, tag: str) -> bool:
        card_id = make_card_id(format, data)
        with self._transaction() as session:
            result = session.execute(
                delete(CardTagORM).where(CardTagORM.card_id == card_id, CardTagORM.tag == tag)
            )
            return result.rowcount > 0

    def delete_tag(self, tag: str) -> bool:
        logger.info(f"Deleting tag {tag}")
        with self._transaction() as session:
            result = session.execute(delete(CardTagORM).where(CardTagORM.tag == tag))
            return result.rowcount > 0

    def get_cards_by_tag(self, tag: Optional[str]) -> List[LoyaltyCard]:
        if not tag:
            return self.get_all_cards()

        with self._transaction() as session:
            cards_orm = session.execute(
                select(CardORM)
                .join(CardTagORM, CardORM.id == CardTagORM.card_id)
                .where(CardTagORM.tag == tag)
                .order_by(CardORM.name)
            ).scalars().all()
            return orm_list_to_cards(cards_orm)

    def get_all_groups(self) -> List[str]:
        with self._transaction() as session:
            groups = session.execute(
                select(CardTagORM.tag).distinct().order_by(CardTagORM.tag)
            ).scalars().all()

        for group in groups:
            logger.debug(f"Found group: {group}")
        return list(groups)

    def get_tags_for_card(self, format: str, data: str) -> List[str]:
        """Get every group a card belongs to, ascending"""
        card_id = make_card_id(format, data)
        with self._transaction() as session:
            return list(session.execute(
                select(CardTagORM.tag)
                .where(CardTagORM.card_id == card_id)
                .order_by(CardTagORM.tag)
            ).scalars().all())

    def rename_tag(self, old_tag: str, new_tag: str) -> int:
        """
        Move every card in ``old_tag`` to ``new_tag``

        Reads the cards under the old tag, deletes the old memberships and
        adds one new membership per card, all in one transaction. Cards
        already in ``new_tag`` are merged.

        Args:
            old_tag: Group to rename
            new_tag: New group name

        Returns:
            Number of cards moved
        """
        if not old_tag or not new_tag or old_tag == new_tag:
            return 0

        with self._transaction() as session:
            card_ids = session.execute(
                select(CardORM.id)
                .join(CardTagORM, CardORM.id == CardTagORM.card_id)
                .where(CardTagORM.tag == old_tag)
            ).scalars().all()

            session.execute(delete(CardTagORM).where(CardTagORM.tag == old_tag))

            already_tagged = set(session.execute(
                select(CardTagORM.card_id).where(CardTagORM.tag == new_tag)
            ).scalars().all())
            session.add_all([
                CardTagORM(card_id=card_id, tag=new_tag)
                for card_id in card_ids
                if card_id not in already_tagged
            ])

        logger.info(f"Moved {len(card_ids)} cards from tag '{old_tag}' to '{new_tag}'")
        return len(card_ids)

    def set_group_members(self, tag: str, card_ids: Iterable[str]) -> int:
        """
        Replace the members of a group

        Args:
            tag: Group to rewrite
            card_ids: Derived ids of the cards that should be in the group

        Returns:
            Number of memberships written
        """
        if not tag:
            return 0

        written = set()
        with self._transaction() as session:
            session.execute(delete(CardTagORM).where(CardTagORM.tag == tag))
            for card_id in card_ids:
                if card_id in written:
                    continue
                if parse_card_id(card_id) is None or session.get(CardORM, card_id) is None:
                    logger.warning(f"Skipping unknown card {card_id} for tag '{tag}'")
                    continue
                logger.info(f"Adding tag {tag} to card {card_id}")
                session.add(CardTagORM(card_id=card_id, tag=tag))
                written.add(card_id)

        return len(written)
