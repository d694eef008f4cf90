"""OSC address vocabulary shared with the looping engine."""

# Inbound, matched by prefix
PINGACK = "/pingack"
LED = "/led"
DISPLAY = "/display"
HEARTBEAT = "/heartbeat"

# Outbound requests
ENGINE_PREFIX = "/loop4r"
PING = f"{ENGINE_PREFIX}/ping"
REGISTER_AUTO_UPDATE = f"{ENGINE_PREFIX}/register_auto_update"
UNREGISTER_AUTO_UPDATE = f"{ENGINE_PREFIX}/unregister_auto_update"
QUERY_LEDS = f"{ENGINE_PREFIX}/leds"
QUERY_DISPLAY = f"{ENGINE_PREFIX}/display"

# Host the engine should reply to
REPLY_HOST = "127.0.0.1"
