from pathlib import Path

import pydantic_settings


class BucketAclSettings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_prefix="BUCKET_ACL_")

    # seconds
    api_timeout: int = 120
    token_path: Path | None = None
    storage_api_version: str = "v1"


settings = BucketAclSettings()
