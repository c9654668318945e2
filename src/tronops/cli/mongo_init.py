"""Bootstrap the MongoDB replica set and application user.

Usage:
    MONGO_APP_PASSWORD=... tronops-mongo-init

Idempotent: safe to run on every container start.
"""

import asyncio
import logging

from tronops.container import Container
from tronops.exceptions import TronOpsError

logger = logging.getLogger("tronops.mongo_init")


async def run_bootstrap(container: Container) -> int:
    client = container.mongo_client()
    try:
        result = await container.replica_set_bootstrapper().run()
    except TronOpsError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    except Exception:
        logger.exception("Replica-set bootstrap failed")
        return 1
    finally:
        await client.close()

    logger.info(
        "Bootstrap complete (initiated=%s, user_created=%s, user_updated=%s)",
        result.initiated, result.user_created, result.user_updated,
    )
    return 0


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    return asyncio.run(run_bootstrap(Container()))


if __name__ == "__main__":
    raise SystemExit(main())
