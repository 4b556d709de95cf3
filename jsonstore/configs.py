import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")

@dataclass(frozen=True)
class AppConfig:
    env: str
    storage_root: str
    tenant_override_header: str
    tenant_key_includes_port: bool
    enforce_unique_display_name: bool
    require_display_name: bool
    duplicate_name_status: int
    default_config_path: str
    serialize_tenant_writes: bool
    max_request_bytes: int
    host: str
    port: int

def load_config() -> AppConfig:
    return AppConfig(
        env=os.getenv("APP_ENV", "local"),
        storage_root=os.getenv("STORAGE_ROOT", "./ahc_charts_db"),
        tenant_override_header=os.getenv("TENANT_OVERRIDE_HEADER", "X-Host"),
        tenant_key_includes_port=_env_bool("TENANT_KEY_INCLUDES_PORT", True),
        enforce_unique_display_name=_env_bool("ENFORCE_UNIQUE_DISPLAY_NAME", True),
        require_display_name=_env_bool("REQUIRE_DISPLAY_NAME", False),
        duplicate_name_status=int(os.getenv("DUPLICATE_NAME_STATUS", 409)),
        default_config_path=os.getenv("DEFAULT_CONFIG_PATH", ""),
        serialize_tenant_writes=_env_bool("SERIALIZE_TENANT_WRITES", False),
        max_request_bytes=int(os.getenv("MAX_REQUEST_BYTES", 52428800)),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 3000)),
    )
