"""Records for AI model management — models, deployments, metrics, logs, settings.

These are plain data carriers exchanged with repository implementations. Enum
values keep the variant names used on the wire (``"TextGeneration"``, ...).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from burncloud_db.errors import SerializationError

R = TypeVar("R", bound="Record")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """Base for serializable records."""

    # fields such as model_id and model_type are part of the record shape
    model_config = ConfigDict(protected_namespaces=())

    def to_json(self) -> str:
        try:
            return self.model_dump_json()
        except (ValueError, TypeError) as exc:
            raise SerializationError(f"cannot encode {type(self).__name__}: {exc}", exc) from exc

    @classmethod
    def from_json(cls: type[R], data: str | bytes) -> R:
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise SerializationError(f"cannot decode {cls.__name__}: {exc}", exc) from exc


# ── models ───────────────────────────────────────────────────────────────────


class ModelType(str, Enum):
    TEXT_GENERATION = "TextGeneration"
    CHAT_COMPLETION = "ChatCompletion"
    EMBEDDING = "Embedding"
    CODE_GENERATION = "CodeGeneration"
    IMAGE_GENERATION = "ImageGeneration"
    MULTIMODAL = "Multimodal"


class ModelStatus(str, Enum):
    AVAILABLE = "Available"
    DOWNLOADING = "Downloading"
    DOWNLOADED = "Downloaded"
    INSTALLING = "Installing"
    INSTALLED = "Installed"
    RUNNING = "Running"
    STOPPED = "Stopped"
    ERROR = "Error"


class ModelRequirements(Record):
    min_ram_gb: float
    min_vram_gb: float | None = None
    gpu_required: bool = False
    cpu_cores: int = 1
    disk_space_gb: float
    supported_platforms: list[str] = Field(default_factory=list)


class AiModel(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    version: str
    size_gb: float
    model_type: ModelType
    provider: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    capabilities: list[str] = Field(default_factory=list)
    requirements: ModelRequirements
    status: ModelStatus = ModelStatus.AVAILABLE
    download_url: str | None = None
    checksum: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


# ── deployments ──────────────────────────────────────────────────────────────


class LogLevel(str, Enum):
    DEBUG = "Debug"
    INFO = "Info"
    WARN = "Warn"
    ERROR = "Error"


class DeploymentStatus(str, Enum):
    STOPPED = "Stopped"
    STARTING = "Starting"
    RUNNING = "Running"
    STOPPING = "Stopping"
    ERROR = "Error"


class DeploymentConfig(Record):
    auto_start: bool = False
    restart_on_failure: bool = True
    max_restart_count: int = 3
    health_check_interval: int = 30
    timeout_seconds: int = 300
    log_level: LogLevel = LogLevel.INFO
    custom_args: dict[str, str] = Field(default_factory=dict)


class ResourceConfig(Record):
    context_length: int = 4096
    temperature: float = 0.7
    top_p: float = 0.9
    top_k: int = 40
    max_tokens: int = 2048
    gpu_layers: int | None = None
    threads: int | None = None
    batch_size: int = 512


class ModelDeployment(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    model_id: uuid.UUID
    name: str
    port: int = Field(ge=0, le=65535)
    bind_address: str = "127.0.0.1"
    api_key: str
    max_concurrent: int = 4
    config: DeploymentConfig = Field(default_factory=DeploymentConfig)
    resource_config: ResourceConfig = Field(default_factory=ResourceConfig)
    status: DeploymentStatus = DeploymentStatus.STOPPED
    pid: int | None = None
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


# ── metrics & logs ───────────────────────────────────────────────────────────


class SystemMetrics(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    timestamp: datetime = Field(default_factory=_now)
    cpu_usage: float
    memory_usage: float
    memory_total: int
    disk_usage: float
    disk_total: int
    gpu_usage: float | None = None
    gpu_memory_usage: float | None = None
    network_rx: int = 0
    network_tx: int = 0


class ModelMetrics(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    deployment_id: uuid.UUID
    timestamp: datetime = Field(default_factory=_now)
    request_count: int = 0
    error_count: int = 0
    average_response_time: float = 0.0
    tokens_per_second: float = 0.0
    concurrent_requests: int = 0
    queue_length: int = 0
    memory_usage: float = 0.0


class RequestLog(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    deployment_id: uuid.UUID
    timestamp: datetime = Field(default_factory=_now)
    method: str
    endpoint: str
    status_code: int
    response_time_ms: int
    input_tokens: int | None = None
    output_tokens: int | None = None
    user_id: str | None = None
    client_ip: str
    user_agent: str | None = None
    error_message: str | None = None


class SystemLog(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    timestamp: datetime = Field(default_factory=_now)
    level: LogLevel
    component: str
    message: str
    context: dict[str, str] = Field(default_factory=dict)
    deployment_id: uuid.UUID | None = None
    model_id: uuid.UUID | None = None


# ── user settings ────────────────────────────────────────────────────────────


class Theme(str, Enum):
    LIGHT = "Light"
    DARK = "Dark"
    SYSTEM = "System"


class FontSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "ExtraLarge"


class NotificationType(str, Enum):
    MODEL_STARTED = "ModelStarted"
    MODEL_STOPPED = "ModelStopped"
    MODEL_ERROR = "ModelError"
    HIGH_RESOURCE_USAGE = "HighResourceUsage"
    LOW_DISK_SPACE = "LowDiskSpace"
    SECURITY_ALERT = "SecurityAlert"


class UserSettings(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: str
    theme: Theme = Theme.SYSTEM
    language: str = "en"
    font_size: FontSize = FontSize.MEDIUM
    auto_refresh_interval: int = 30
    notifications_enabled: bool = True
    notification_types: list[NotificationType] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


# ── security ─────────────────────────────────────────────────────────────────


class Permission(str, Enum):
    MODEL_READ = "ModelRead"
    MODEL_WRITE = "ModelWrite"
    MODEL_DEPLOY = "ModelDeploy"
    SYSTEM_MONITOR = "SystemMonitor"
    LOGS_READ = "LogsRead"
    SETTINGS_READ = "SettingsRead"
    SETTINGS_WRITE = "SettingsWrite"
    ADMIN_ALL = "AdminAll"


class ApiKey(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    key_hash: str
    permissions: list[Permission] = Field(default_factory=list)
    rate_limit: int | None = None
    expires_at: datetime | None = None
    last_used_at: datetime | None = None
    created_at: datetime = Field(default_factory=_now)
    is_active: bool = True


class AccessControlConfig(Record):
    allow_localhost_only: bool = True
    allowed_ips: list[str] = Field(default_factory=list)
    blocked_ips: list[str] = Field(default_factory=list)
    require_api_key: bool = False
    session_timeout: int = 3600


class RateLimitConfig(Record):
    enabled: bool = False
    requests_per_minute: int = 60
    requests_per_hour: int = 1000
    burst_limit: int = 10
    whitelist_ips: list[str] = Field(default_factory=list)


class FirewallRuleType(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"
    LOG = "Log"


class NetworkProtocol(str, Enum):
    TCP = "Tcp"
    UDP = "Udp"
    HTTP = "Http"
    HTTPS = "Https"


class FirewallAction(str, Enum):
    ACCEPT = "Accept"
    DROP = "Drop"
    REJECT = "Reject"
    LOG = "Log"


class FirewallRule(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    rule_type: FirewallRuleType
    source_ip: str | None = None
    destination_port: int | None = Field(default=None, ge=0, le=65535)
    protocol: NetworkProtocol
    action: FirewallAction
    is_enabled: bool = True
    created_at: datetime = Field(default_factory=_now)


class SecurityConfig(Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    api_keys: list[ApiKey] = Field(default_factory=list)
    rate_limiting: RateLimitConfig = Field(default_factory=RateLimitConfig)
    access_control: AccessControlConfig = Field(default_factory=AccessControlConfig)
    firewall_rules: list[FirewallRule] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
