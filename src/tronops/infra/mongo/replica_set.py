"""Idempotent MongoDB replica-set bootstrap.

Declares the desired state (one-member replica set, one application user)
and converges to it. Safe to re-run against an already-initialised node.
"""

import logging
from typing import Any

from pydantic import BaseModel
from pymongo import AsyncMongoClient
from pymongo.errors import OperationFailure
from tenacity import RetryError, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tronops.exceptions import BootstrapError

logger = logging.getLogger(__name__)

# MongoDB server error codes
NOT_YET_INITIALIZED = 94
NO_REPLICATION_ENABLED = 76


class ReplicaSetSpec(BaseModel):
    set_name: str = "rs0"
    member_host: str = "mongo:27017"
    app_db: str = "gamehub"
    app_user: str = "gamehub_app"
    app_password: str
    app_role: str = "readWrite"

    def replica_config(self) -> dict[str, Any]:
        return {"_id": self.set_name, "members": [{"_id": 0, "host": self.member_host}]}

    def roles(self) -> list[dict[str, str]]:
        return [{"role": self.app_role, "db": self.app_db}]


class BootstrapResult(BaseModel):
    initiated: bool = False
    user_created: bool = False
    user_updated: bool = False


class PrimaryNotReady(Exception):
    pass


class ReplicaSetBootstrapper:
    def __init__(self, client: AsyncMongoClient, spec: ReplicaSetSpec) -> None:
        self._client = client
        self._spec = spec

    async def ensure_replica_set(self) -> bool:
        """Initiate the replica set if needed. Returns True when it was initiated now."""
        admin = self._client.admin
        try:
            status = await admin.command("replSetGetStatus")
        except OperationFailure as exc:
            if exc.code == NOT_YET_INITIALIZED:
                logger.info("Initiating replica set %s with member %s", self._spec.set_name, self._spec.member_host)
                await admin.command("replSetInitiate", self._spec.replica_config())
                return True
            if exc.code == NO_REPLICATION_ENABLED:
                raise BootstrapError("mongod is not running with --replSet", payload=exc.details) from exc
            raise BootstrapError(f"replSetGetStatus failed: {exc}", payload=exc.details) from exc

        current = status.get("set")
        if current != self._spec.set_name:
            raise BootstrapError(
                f"Node already belongs to replica set {current!r}, expected {self._spec.set_name!r}",
                payload=status,
            )
        logger.info("Replica set %s already initiated", current)
        return False

    @retry(
        retry=retry_if_exception_type(PrimaryNotReady),
        stop=stop_after_attempt(10),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
    )
    async def _poll_primary(self) -> dict:
        hello = await self._client.admin.command("hello")
        if not hello.get("isWritablePrimary"):
            raise PrimaryNotReady(hello.get("setName"))
        return hello

    async def wait_for_primary(self) -> dict:
        try:
            hello = await self._poll_primary()
        except RetryError as exc:
            raise BootstrapError("No primary elected in time") from exc
        logger.info("Primary ready: %s", hello.get("me", self._spec.member_host))
        return hello

    async def ensure_app_user(self) -> str:
        """Create the application user, or reconcile its password and roles. Returns "created" or "updated"."""
        db = self._client[self._spec.app_db]
        info = await db.command("usersInfo", self._spec.app_user)
        password = self._spec.app_password
        roles = self._spec.roles()

        if info.get("users"):
            await db.command("updateUser", self._spec.app_user, pwd=password, roles=roles)
            logger.info("Updated user %s on %s", self._spec.app_user, self._spec.app_db)
            return "updated"

        await db.command("createUser", self._spec.app_user, pwd=password, roles=roles)
        logger.info("Created user %s on %s", self._spec.app_user, self._spec.app_db)
        return "created"

    async def run(self) -> BootstrapResult:
        if not self._spec.app_password:
            raise BootstrapError("MONGO_APP_PASSWORD must be set")
        initiated = await self.ensure_replica_set()
        await self.wait_for_primary()
        action = await self.ensure_app_user()
        return BootstrapResult(
            initiated=initiated,
            user_created=action == "created",
            user_updated=action == "updated",
        )
