"""Fixed values shared by the request layer and the model client."""

SDK_VERSION = "0.1.0"

# Hosts
API_BASE_PATH = "aiplatform.googleapis.com"
GOOGLE_INTERNAL_ENDPOINT = "googleapis.com"

DEFAULT_API_VERSION = "v1"
DEFAULT_LOCATION = "us-central1"

# Header names
AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
USER_AGENT_HEADER = "User-Agent"
X_GOOG_API_CLIENT_HEADER = "X-Goog-Api-Client"
SERVER_RESERVED_HEADERS = (AUTHORIZATION_HEADER, CONTENT_TYPE_HEADER)

# Resource methods
GENERATE_CONTENT_METHOD = "generateContent"
STREAMING_GENERATE_CONTENT_METHOD = "streamGenerateContent"
COUNT_TOKENS_METHOD = "countTokens"

USER_AGENT_PRODUCT = "model-builder"
CLIENT_LIBRARY_LANGUAGE = f"vertex-query-python/{SDK_VERSION}"
USER_AGENT = f"{USER_AGENT_PRODUCT}/{SDK_VERSION} {CLIENT_LIBRARY_LANGUAGE}"

# Abort reasons
REQUEST_ABORTED_REASON = "Request aborted."
REQUEST_TIMED_OUT_REASON = "Request timed out."
