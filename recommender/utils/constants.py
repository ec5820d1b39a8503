"""
Default tunables for the recommendation pipeline.

Every value can be overridden through the environment (see recommender.config).
"""

# Embedding model and vector size stored in the documents table
DEFAULT_EMBEDDING_MODEL = "gemini-embedding-001"
DEFAULT_EMBEDDING_DIMENSIONS = 1536

# Chat model used to phrase the recommendation
DEFAULT_CHAT_MODEL = "gemini-2.5-flash"

# Similarity search (Postgres function exposed through PostgREST)
DEFAULT_MATCH_FUNCTION = "match_documents"
DEFAULT_MATCH_THRESHOLD = 0.50
DEFAULT_MATCH_COUNT = 1

# Sampling parameters for the completion request
DEFAULT_TEMPERATURE = 0.5
DEFAULT_FREQUENCY_PENALTY = 0.5

# Outbound call policy. MAX_RETRIES=0 means a single attempt per stage.
DEFAULT_MAX_RETRIES = 0
DEFAULT_RETRY_BACKOFF_SECONDS = 0.5
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

# Pipeline stage names, used in ProviderError and log lines
STAGE_EMBEDDING = "embedding"
STAGE_SEARCH = "search"
STAGE_COMPLETION = "completion"
