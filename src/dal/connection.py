import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from pydantic import BaseModel, SecretStr, field_validator, model_validator

from common.config.settings import CoreSettings, get_settings
from dal.dialect import DEFAULT_PORTS, Dialect, normalize_dialect
from dal.strategies import get_strategy

logger = logging.getLogger(__name__)


class ConnectionDescriptor(BaseModel):
    """Where and how to reach one database server.

    ``port`` defaults to the dialect's standard port when omitted.
    """

    host: str
    port: int
    user: str
    password: SecretStr = SecretStr("")
    dialect: Dialect

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_port(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("port") in (None, ""):
            data = dict(data)
            try:
                data["port"] = DEFAULT_PORTS[normalize_dialect(data.get("dialect"))]
            except ValueError:
                # Unknown dialect; reported by the dialect validator.
                data.pop("port", None)
        return data

    @field_validator("dialect", mode="before")
    @classmethod
    def _normalize_dialect(cls, value: Any) -> Dialect:
        return normalize_dialect(value)


@asynccontextmanager
async def open_connection(
    descriptor: ConnectionDescriptor,
    database: Optional[str] = None,
    settings: Optional[CoreSettings] = None,
) -> AsyncIterator[Any]:
    """Open a dedicated driver connection and close it on every exit path.

    Raises:
        DriverError: If the connection cannot be opened.
    """
    settings = settings or get_settings()
    strategy = get_strategy(descriptor.dialect)
    conn = await strategy.connect(
        host=descriptor.host,
        port=descriptor.port,
        user=descriptor.user,
        password=descriptor.password.get_secret_value(),
        database=database,
        timeout=settings.connect_timeout_seconds,
    )
    try:
        yield conn
    finally:
        await conn.close()
        logger.debug(
            "Closed %s connection to %s:%s", descriptor.dialect.value, descriptor.host, descriptor.port
        )
