#!/usr/bin/env python3
"""
Database Reset Script
Reset PostgreSQL database structure

Features:
1. Drop & Recreate Database - completely wipe the database
2. Run Alembic Migrations - create the latest schema

Notes:
- This script only resets database structure, does not seed data
- To seed demo data, run `python -m script.seed_data`
"""

import asyncio
import os
import subprocess
import sys

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine

from src.platform.config.core_setting import settings
from src.platform.constant.path import BASE_DIR


DB_WAIT_SECONDS = 1


def _parse_db_connection(database_url: str) -> tuple[str, str]:
    """Return (admin url pointing at the postgres db, target db name)"""
    url = make_url(database_url).set(drivername='postgresql+asyncpg')
    db_name = url.database or settings.POSTGRES_DB
    admin_url = url.set(database='postgres').render_as_string(hide_password=False)
    return admin_url, db_name


async def _terminate_connections(conn: AsyncConnection, db_name: str) -> None:
    await conn.execute(
        text(
            'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
            'WHERE datname = :db_name AND pid <> pg_backend_pid()'
        ),
        {'db_name': db_name},
    )


async def _drop_and_create_db(admin_url: str, db_name: str) -> None:
    admin_engine = create_async_engine(admin_url, isolation_level='AUTOCOMMIT')

    try:
        async with admin_engine.connect() as conn:
            await _terminate_connections(conn, db_name)

            await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")

            await asyncio.sleep(DB_WAIT_SECONDS)

            await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        await admin_engine.dispose()


def _run_alembic_migrations() -> None:
    print("   🔄 Running 'alembic upgrade head'...")

    result = subprocess.run(
        ['alembic', 'upgrade', 'head'],
        cwd=BASE_DIR,
        capture_output=True,
        text=True,
        env=os.environ.copy(),
    )

    if result.returncode != 0:
        print(f'   ❌ Migration failed (return code: {result.returncode})')
        if result.stdout:
            print(f'   📋 STDOUT: {result.stdout}')
        if result.stderr:
            print(f'   📋 STDERR: {result.stderr}')
        raise RuntimeError(f'Alembic migration failed with return code {result.returncode}')

    print('   ✅ Database migrations completed')


def main() -> None:
    admin_url, db_name = _parse_db_connection(settings.DATABASE_URL_ASYNC)
    print('🔄 Starting database reset...')
    print(f'Database name: {db_name}')
    print('=' * 50)

    try:
        print('🗑️ Dropping database...')
        asyncio.run(_drop_and_create_db(admin_url, db_name))

        print('🏗️ Running database migrations...')
        _run_alembic_migrations()

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed demo data, run: python -m script.seed_data')
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        sys.exit(1)


if __name__ == '__main__':
    main()
