# Environment configuration
ENV_TARGET_KEY = "ENV_BLOOM_TARGET_KEY"
ENV_OUTPUT_FORMAT = "ENV_BLOOM_OUTPUT_FORMAT"


# Bloom layout (16-bit filter, 4 probes from one fingerprint)
BLOOM_BITS = 16
BLOOM_BYTES = BLOOM_BITS // 8
PROBE_SHIFTS = (12, 8, 4, 0)
PROBE_MASK = 0x0F

# Fingerprint of a missing/unsupported value; no digest is computed for it
NULL_FINGERPRINT = 0

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


# Output encodings
FORMAT_GENERIC = "generic"
FORMAT_FIXED = "fixed"
FORMAT_DER = "der"
OUTPUT_FORMATS = (FORMAT_GENERIC, FORMAT_FIXED, FORMAT_DER)
DEFAULT_OUTPUT_FORMAT = FORMAT_FIXED


GZIP_WBITS = 16 + 15
GZIP_READ_SIZE = 64 * 1024
