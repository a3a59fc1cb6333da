"""Tool titles and descriptions for MCP tools."""

# Table-level tools
TITLE_GET_TABLES_INFO = "Get Tables Info"
DESC_GET_TABLES_INFO = "Get the metadata about specified tables"

TITLE_GET_TABLES_INDEX_HEALTH = "Get Tables Index Health"
DESC_GET_TABLES_INDEX_HEALTH = "Assess index health for specified tables"

TITLE_GET_TABLES_MISSING_INDEXES = "Get Tables Missing Indexes"
DESC_GET_TABLES_MISSING_INDEXES = "Identify missing indexes for specified tables"

# Schema-level tools
TITLE_GET_ACTIVE_TABLES_INFO = "Get Active Tables Info"
DESC_GET_ACTIVE_TABLES_INFO = (
    "Get workload, size, primary key and index health metadata for every table "
    "with recorded read or write activity"
)

# Server-level tools
TITLE_GET_SERVER_INFO = "Get Server Info"
DESC_GET_SERVER_INFO = (
    "Retrieve information about the SQL Server instance such as version, current update level, "
    "edition, and licensing details"
)

# Database-level tools
TITLE_GET_DB_COLLATION = "Get Database Collation"
DESC_GET_DB_COLLATION = "Retrieve the collation setting for the current database"

TITLE_GET_COLLATION_MISMATCHES = "Get Collation Mismatches"
DESC_GET_COLLATION_MISMATCHES = "Retrieve the columns with collation settings that differ from the database default"

# Argument descriptions
ARG_TABLE_NAMES = (
    "Table names as a list of strings, without schema prefix or brackets "
    "(letters, digits and underscores only), e.g. ['Orders', 'Customers']"
)
