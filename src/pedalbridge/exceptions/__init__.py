"""
Custom exception hierarchy for the pedal bridge.

## Exception Hierarchy

```
PedalBridgeError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── ProtocolError
│   └── MessageDecodeError
└── TransportError
    ├── OscBindError
    └── MidiSendError
```

All custom exceptions inherit from `PedalBridgeError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

Configuration errors reach the user through the CLI. Protocol and transport
errors never leave the bridge loop: they are logged and the bridge carries on.

### Example: Malformed LED update

```python
from pedalbridge.exceptions import MessageDecodeError

raise MessageDecodeError("/led", "argument 2: expected int, got str")

# Logged: "Rejected /led: argument 2: expected int, got str"
```
"""

from .base import PedalBridgeError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import format_error_for_display, wrap_pydantic_error
from .protocol import (
    MessageDecodeError,
    MidiSendError,
    OscBindError,
    ProtocolError,
    TransportError,
)

__all__ = [
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    # Protocol
    "MessageDecodeError",
    # Transport
    "MidiSendError",
    "OscBindError",
    # Base
    "PedalBridgeError",
    "ProtocolError",
    "TransportError",
    # Handlers
    "format_error_for_display",
    "wrap_pydantic_error",
]
