from dependency_injector import containers, providers
from pymongo import AsyncMongoClient

from tronops.config import Settings
from tronops.infra.http.client import RateLimitedClient
from tronops.infra.mongo.replica_set import ReplicaSetBootstrapper, ReplicaSetSpec
from tronops.infra.tron.keys import load_signer
from tronops.infra.tron.node_client import TronNodeClient
from tronops.services.transfer import TransferInvoker


def _node_headers(settings: Settings) -> dict[str, str]:
    api_key = settings.tron_api_key.get_secret_value()
    return {"TRON-PRO-API-KEY": api_key} if api_key else {}


def _replica_set_spec(settings: Settings) -> ReplicaSetSpec:
    return ReplicaSetSpec(
        set_name=settings.mongo_replica_set,
        member_host=settings.mongo_member_host,
        app_db=settings.mongo_app_db,
        app_user=settings.mongo_app_user,
        app_password=settings.mongo_app_password.get_secret_value(),
        app_role=settings.mongo_app_role,
    )


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        base_url=settings.provided.tron_node_url,
        headers=providers.Callable(_node_headers, settings),
        rate_per_second=settings.provided.tron_rate_per_second,
        timeout=settings.provided.tron_timeout,
    )

    node_client = providers.Singleton(TronNodeClient, http_client=http_client)

    signer = providers.Singleton(load_signer, settings=settings)

    transfer_invoker = providers.Factory(
        TransferInvoker,
        node=node_client,
        signer=signer,
    )

    mongo_client = providers.Singleton(
        AsyncMongoClient,
        settings.provided.mongo_uri,
        directConnection=True,
    )

    replica_set_bootstrapper = providers.Factory(
        ReplicaSetBootstrapper,
        client=mongo_client,
        spec=providers.Callable(_replica_set_spec, settings),
    )
