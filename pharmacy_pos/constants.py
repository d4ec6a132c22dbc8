APP_NAME = "Pharmacy POS"
STYLE_FILE = "resources/styles.qss"

DATA_DIR = "data"
DB_FILE_NAME = "pharmacy.db"

TABLE_SCHEMA_VERSION = "schema_version"
SCHEMA_VERSION = "1.0.0"

CURRENCY_SYMBOL = "₹"
LOW_STOCK_THRESHOLD = 10

INVOICE_PREFIX = "INV"
QUOTATION_PREFIX = "QTN"
ITEM_CODE_PREFIX = "ITEM"

INVOICE_STATUSES = ("Draft", "Completed")
DEFAULT_INVOICE_STATUS = "Completed"
