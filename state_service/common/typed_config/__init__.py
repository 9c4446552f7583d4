# state_service/common/typed_config - typed config accessors
#
# Config sections are typed as frozen dataclasses. The YAML reader lives in
# state_service.common.typed_config.reader and is not imported here, so that
# core modules importing ServiceConfig do not load yaml.

from state_service.common.typed_config.models import (
    COPY_MODES,
    ServiceConfig,
    safe_bool,
    safe_str,
)

__all__ = [
    # Dataclasses
    "ServiceConfig",
    "COPY_MODES",
    # Helper functions
    "safe_bool",
    "safe_str",
]
