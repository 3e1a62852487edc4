import os

# Seed catalog; also the reset target and the custom/default classifier.
DEFAULT_ITEMS: tuple[str, ...] = (
    "CARTON BOX NO.30",
    "CARTON BOX NO.38",
    "CARTON BOX NO.26",
    "CARTON BOX NO SCREEN",
    "CARTON BOX 40x40x20 cm.",
    "CARTON BOX NO.1 พิมพ์โลโก้ พิมพ์ NO.กล่อง",
)

STORAGE_KEY_ITEMS: str = "autocomplete_items_v1"
STORAGE_KEY_ROWS: str = "autocomplete_rows_v1"

# /* ~~~ how many suggestions a single ranking pass returns ~~~ */
SUGGESTION_LIMIT: int = 25

# "Copied" indicator lifetime in the GUIs (milliseconds)
COPY_FLASH_MS: int = 1200

# Key-value store DSN: "sqlite:///path/to/file.sqlite" or "memory://"
DEFAULT_DSN: str = os.environ.get("PHRASEBOOK_DB", "memory://")

EXPORT_PREFIX: str = "custom-items"
