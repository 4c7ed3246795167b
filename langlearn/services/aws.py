"""boto3 client construction and non-blocking invocation."""
from __future__ import annotations
import asyncio
import functools
from typing import Any, Callable, Optional, TypeVar

import boto3
from botocore.config import Config

T = TypeVar("T")

# Each stage is attempted once; failures surface to the caller.
SINGLE_ATTEMPT = Config(retries={"total_max_attempts": 1, "mode": "standard"})


def client(service_name: str, region_name: Optional[str] = None):
    return boto3.client(service_name, region_name=region_name, config=SINGLE_ATTEMPT)


def resource(service_name: str, region_name: Optional[str] = None):
    return boto3.resource(service_name, region_name=region_name, config=SINGLE_ATTEMPT)


async def call(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking boto3 call on the loop's default executor and await it."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
