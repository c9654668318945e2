from decimal import Decimal

from pydantic import SecretStr
from pydantic_settings import BaseSettings

USDT_CONTRACT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"


class Settings(BaseSettings):
    # Tron full node
    tron_node_url: str = "https://api.trongrid.io"
    tron_api_key: SecretStr = SecretStr("")
    tron_rate_per_second: float = 5.0
    tron_timeout: float = 30.0
    tron_explorer_tx_url: str = "https://tronscan.org/#/transaction/{txid}"

    # Credentials: mnemonic at m/44'/195'/{account}'/0/{index}, or a raw key
    tron_mnemonic: SecretStr = SecretStr("")
    tron_mnemonic_passphrase: SecretStr = SecretStr("")
    tron_mnemonic_words: int = 24
    tron_derivation_account: int = 0
    tron_derivation_index: int = 0
    tron_private_key: SecretStr = SecretStr("")

    # Transfer
    tron_from_address: str = ""
    tron_to_address: str = ""
    tron_token_contract: str = USDT_CONTRACT
    tron_token_symbol: str = "USDT"
    tron_token_decimals: int = 6
    tron_amount: Decimal = Decimal(0)
    tron_fee_limit_sun: int = 20_000_000  # 20 TRX

    # MongoDB replica-set bootstrap
    mongo_uri: str = "mongodb://mongo:27017/?directConnection=true"
    mongo_replica_set: str = "rs0"
    mongo_member_host: str = "mongo:27017"
    mongo_app_db: str = "gamehub"
    mongo_app_user: str = "gamehub_app"
    mongo_app_password: SecretStr = SecretStr("")
    mongo_app_role: str = "readWrite"

    def explorer_url(self, txid: str) -> str:
        return self.tron_explorer_tx_url.format(txid=txid)

    class Config:
        env_file = ".env"
