"""Infrastructure layer for the Mauboussin analysis toolkit.

Re-exports the public API surface for convenience::

    from mauboussin_analyzer.infrastructure import (
        EventBus, EventStore,
        ReportConfig, ExportConfig,
        to_json, from_yaml,
    )
"""

from mauboussin_analyzer.infrastructure.config import (
    ExportConfig,
    ReportConfig,
    load_config_from_json,
    load_config_from_yaml,
)
from mauboussin_analyzer.infrastructure.event_bus import EventBus, EventStore
from mauboussin_analyzer.infrastructure.serialization import (
    apply_answers,
    from_json,
    from_yaml,
    record_from_dict,
    snapshot_to_dict,
    to_json,
    to_yaml,
)

__all__ = [
    # Event bus
    "EventBus",
    "EventStore",
    # Configuration
    "ReportConfig",
    "ExportConfig",
    "load_config_from_json",
    "load_config_from_yaml",
    # Serialization
    "snapshot_to_dict",
    "record_from_dict",
    "apply_answers",
    "to_json",
    "from_json",
    "to_yaml",
    "from_yaml",
]
