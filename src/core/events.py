"""Application lifecycle event handlers.

Startup connects MongoDB and ensures indexes; shutdown releases the LLM
client and the database connection.
"""

from typing import Awaitable, Callable, List, Tuple

from fastapi import FastAPI

from src.core.config import get_settings
from src.database.mongodb import MongoDB
from src.utils.logger import get_logger

logger = get_logger(__name__)

StartupTask = Tuple[str, Callable[[], Awaitable[None]], bool]


class StartupEvent:
    """Handles application startup tasks."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.completed_tasks: List[str] = []
        self.failed_tasks: List[Tuple[str, str]] = []

    def tasks(self) -> List[StartupTask]:
        """Startup tasks in execution order as (name, callable, critical)."""
        return [
            ("Database Connection", self._connect_database, True),
            ("Database Indexes", self._create_indexes, False),
        ]

    async def execute(self) -> None:
        """Execute all startup tasks.

        Raises:
            RuntimeError: If a critical task fails
        """
        settings = get_settings()
        logger.info(
            "Starting application startup sequence",
            extra={
                "app_name": settings.APP_NAME,
                "version": settings.APP_VERSION,
                "environment": settings.APP_ENV,
            }
        )

        for task_name, task_func, critical in self.tasks():
            try:
                await task_func()
            except Exception as e:
                logger.error(f"Failed: {task_name}", extra={"error": str(e)}, exc_info=True)
                self.failed_tasks.append((task_name, str(e)))
                if critical:
                    raise RuntimeError(
                        f"Critical startup task failed: {task_name}. Error: {str(e)}"
                    ) from e
            else:
                self.completed_tasks.append(task_name)
                logger.info(f"Completed: {task_name}")

        logger.info(
            "Startup sequence finished",
            extra={
                "completed": self.completed_tasks,
                "failed": [name for name, _ in self.failed_tasks],
            }
        )

    async def _connect_database(self) -> None:
        settings = get_settings()
        await MongoDB.connect(
            url=settings.get_database_url(),
            db_name=settings.MONGODB_DB_NAME,
        )

    async def _create_indexes(self) -> None:
        await MongoDB.create_indexes()


class ShutdownEvent:
    """Handles application shutdown tasks."""

    def __init__(self, app: FastAPI):
        self.app = app

    async def execute(self) -> None:
        """Release resources; failures are logged and do not stop shutdown."""
        # Imported here so the lifecycle module does not pull in the API layer
        from src.api.dependencies import get_interest_evaluator

        try:
            await get_interest_evaluator().close()
        except Exception as e:
            logger.error(f"Failed to close LLM client: {str(e)}", exc_info=True)

        try:
            await MongoDB.disconnect()
        except Exception as e:
            logger.error(f"Failed to disconnect MongoDB: {str(e)}", exc_info=True)

        logger.info("Shutdown sequence finished")


def create_start_app_handler(app: FastAPI) -> Callable[[], Awaitable[None]]:
    """Create the startup handler for the application."""

    async def start_app() -> None:
        await StartupEvent(app).execute()

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable[[], Awaitable[None]]:
    """Create the shutdown handler for the application."""

    async def stop_app() -> None:
        await ShutdownEvent(app).execute()

    return stop_app


__all__ = ["StartupEvent", "ShutdownEvent", "create_start_app_handler", "create_stop_app_handler"]
