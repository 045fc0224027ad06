"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Request variants (client -> broker)
PUBLISH = "Publish"
SUBSCRIBE = "Subscribe"
UNSUBSCRIBE = "Unsubscribe"

# Response variants (broker -> client)
SUCCESS = "Success"
ERROR = "Error"

# On-the-wire name of the opaque result bytes in a Success response.
SUCCESS_BYTES = "bytes"

CLIENT_ID_MAX = 0xFFFFFFFFFFFFFFFF
