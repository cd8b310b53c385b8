"""Innamark protocol constants.

Single source of truth for the tagged record layout and the text alphabet.
Keep this file stable. Embedders and extractors must remain synchronized.
"""

# Tag byte: [Reserved(1) | Compressed(1) | Sized(1) | Checksum(1) | Hash(1) | Reserved(3)]
TAG_SIZE = 1
TAG_INDEX = 0

FLAG_COMPRESSED = 0x40
FLAG_SIZED = 0x20
FLAG_CHECKSUM = 0x10
FLAG_HASH = 0x08
FLAG_MASK = FLAG_COMPRESSED | FLAG_SIZED | FLAG_CHECKSUM | FLAG_HASH

# Size: u32 little-endian total record length, tag included
SIZE_FMT = "<I"
SIZE_SIZE = 4

# Checksum: CRC-32 over the record with the checksum field zeroed
CHECKSUM_FMT = "<I"
CHECKSUM_SIZE = 4
CHECKSUM_PLACEHOLDER = 0x00

# Hash: SHA3-256 over the record with the hash field zeroed
HASH_ALGORITHM = "sha3_256"
HASH_SIZE = 32
HASH_PLACEHOLDER = 0x00

# Raw deflate stream, no zlib header or trailer
COMPRESSION_LEVEL = 9
COMPRESSION_WBITS = -15

# Text transcoding
DEFAULT_ALPHABET = (
    "\u2008",  # Punctuation space
    "\u2009",  # Thin space
    "\u202F",  # Narrow no-break space
    "\u205F",  # Medium mathematical space
)
SEPARATOR_CHAR = "\u2004"  # Three-per-em space

# Placement target and the character that replaces watermark chars on removal
INSERT_CHAR = " "
REPLACEMENT_CHAR = " "
