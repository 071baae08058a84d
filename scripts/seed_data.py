"""Seed script to populate a local database with sample bookmarks.

Usage:
    PYTHONPATH=src python scripts/seed_data.py populate
    PYTHONPATH=src python scripts/seed_data.py populate --force
    PYTHONPATH=src python scripts/seed_data.py clear
"""

import argparse
import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from db.session import create_engine, create_session_factory
from models import Bookmark

BOOKMARKS = [
    {
        'title': 'Google',
        'url': 'http://www.google.com',
        'description': 'search engine',
        'rating': 4,
    },
    {
        'title': 'Amazon',
        'url': 'http://www.amazon.com',
        'description': 'e-commerce',
        'rating': 3,
    },
    {
        'title': 'Bing',
        'url': 'http://www.bing.com',
        'description': 'search engine?',
        'rating': 2,
    },
]


async def clear_data(session: AsyncSession) -> int:
    """Delete every bookmark. Returns the number of rows removed."""
    result = await session.execute(delete(Bookmark))
    return result.rowcount


async def populate(force: bool = False) -> None:
    """Populate the database with seed data."""
    engine = create_engine(get_settings())
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        try:
            count = (await session.execute(
                select(func.count()).select_from(Bookmark),
            )).scalar()

            if count:
                if force:
                    print('Existing data found, clearing first (--force)...')
                    await clear_data(session)
                    await session.flush()
                else:
                    print(
                        f'Data already exists ({count} bookmarks). '
                        f'Use --force to clear and re-seed.'
                    )
                    return

            session.add_all(Bookmark(**data) for data in BOOKMARKS)
            await session.commit()
            print(f'Created {len(BOOKMARKS)} bookmarks.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Remove all bookmarks."""
    engine = create_engine(get_settings())
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        try:
            deleted = await clear_data(session)
            await session.commit()
            print(f'Deleted {deleted} bookmarks.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    if settings.is_production:
        print(
            "ERROR: Seed script refuses to run with ENVIRONMENT=production.\n"
            "It modifies data directly and must only run against a local database."
        )
        raise SystemExit(1)

    parser = argparse.ArgumentParser(description='Seed the database with sample bookmarks.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Insert the sample bookmarks')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing bookmarks before populating',
    )

    subparsers.add_parser('clear', help='Remove all bookmarks')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
