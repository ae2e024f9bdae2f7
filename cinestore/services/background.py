"""
Execution de taches de fond detachees de la requete.

Chaque tache a sa propre frontiere d'erreur : une exception est
journalisee et ne remonte jamais vers la requete qui l'a lancee.
Les taches en cours sont suivies pour pouvoir les attendre a l'arret.
"""

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger


class BackgroundTasks:
    """
    Lance et suit des taches asyncio independantes.

    Example:
        background = BackgroundTasks()
        background.run(lambda: mailer.send(email, "user_welcome.html", data), name="welcome-email")
        ...
        await background.wait()  # a l'arret de l'application
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Nombre de taches encore en cours."""
        return len(self._tasks)

    def run(self, job: Callable[[], Awaitable[None]], name: str = "background") -> asyncio.Task:
        """
        Lance job dans une tache detachee de l'appelant.

        Doit etre appele depuis une boucle asyncio en cours d'execution.
        """
        task = asyncio.create_task(self._guarded(job, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guarded(self, job: Callable[[], Awaitable[None]], name: str) -> None:
        try:
            await job()
        except asyncio.CancelledError:
            logger.warning("Tache de fond annulee", job=name)
            raise
        except Exception:
            logger.exception("Echec de la tache de fond", job=name)

    async def wait(self) -> None:
        """Attend la fin de toutes les taches en cours."""
        if self._tasks:
            logger.info("Attente des taches de fond", pending=len(self._tasks))
            await asyncio.gather(*self._tasks, return_exceptions=True)
