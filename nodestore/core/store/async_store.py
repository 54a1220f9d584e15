"""Asyncio facade over NodeStore."""
import asyncio
import functools
from concurrent.futures import Executor
from typing import Any, Callable, Optional

from .models import Result
from .store import NodeStore


class AsyncNodeStore:
    """
    Awaitable wrapper running store calls in an executor.

    The store lock may block, so calls never run on the event loop
    thread.

    Example:
        >>> store = AsyncNodeStore()
        >>> result = await store.create("/jobs/1", value="queued")
    """

    def __init__(self, store: Optional[NodeStore] = None, executor: Optional[Executor] = None):
        self.store = store if store is not None else NodeStore()
        self._executor = executor

    async def _run(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args, **kwargs))

    async def get(self, key: str, recursive: bool = False, sorted: Optional[bool] = None) -> Result:
        return await self._run(self.store.get, key, recursive, sorted)

    async def create(self, key: str, is_dir: bool = False, value: Optional[str] = None) -> Result:
        return await self._run(self.store.create, key, is_dir, value)

    async def set(self, key: str, is_dir: bool = False, value: Optional[str] = None) -> Result:
        return await self._run(self.store.set, key, is_dir, value)

    async def update(self, key: str, value: Optional[str]) -> Result:
        return await self._run(self.store.update, key, value)

    async def delete(self, key: str, recursive: bool = False, dir: bool = False) -> Result:
        return await self._run(self.store.delete, key, recursive, dir)

    async def exists(self, key: str) -> bool:
        return await self._run(self.store.exists, key)
