"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.driven_adapter.repo.movie_query_repo_impl import MovieQueryRepoImpl
from src.service.cinema.driven_adapter.repo.seat_query_repo_impl import SeatQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Persistence handle (one engine / pool per process)
    database = providers.Singleton(Database, db_url=config_service.provided.DATABASE_URL_ASYNC)

    # One unit of work per booking attempt
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Read-side repositories (each call opens its own session)
    movie_query_repo = providers.Factory(
        MovieQueryRepoImpl, session_factory=database.provided.session
    )
    seat_query_repo = providers.Factory(
        SeatQueryRepoImpl, session_factory=database.provided.session
    )


container = Container()


async def cleanup() -> None:
    await container.database().dispose()
    container.reset_singletons()
