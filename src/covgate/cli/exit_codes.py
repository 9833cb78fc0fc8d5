# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_THRESHOLD = 2  # One or more coverage checks failed
EXIT_DATAERR = 65  # Input data was invalid (e.g., malformed results JSON)
EXIT_NOINPUT = 66  # Input file not found (e.g., coverage report missing)
EXIT_CONFIG = 78  # Invalid configuration (e.g., threshold out of range)
