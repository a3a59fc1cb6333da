"""Constants for MCP tools."""

# Input sentinels
NO_TABLE_NAMES_PROVIDED = "No table names provided."
INVALID_TABLE_NAMES = (
    "Invalid table names provided: {0}. Table names may contain only letters, digits and underscores."
)

# Empty-result sentinels
NO_SERVER_INFO = "No server information found."
NO_DB_COLLATION = "No collation information found."
NO_COLLATION_MISMATCHES = "No collation mismatches found."
NO_TABLES_INFO = "No information found for the specified tables."
NO_ACTIVE_TABLES = "No active tables found in the schema."
NO_INDEXES = "No indices found with the specified tables."
NO_MISSING_INDEXES = (
    "No missing index recommendations found for the specified tables. State to the user that everything is fine."
)

# Error labels, prepended to the error message returned by a failed tool
ERROR_TABLES_INFO = "Error retrieving tables info"
ERROR_ACTIVE_TABLES_INFO = "Error retrieving active tables info"
ERROR_INDEX_HEALTH = "Error retrieving index health"
ERROR_MISSING_INDEXES = "Error retrieving missing indexes"
ERROR_SERVER_INFO = "Error retrieving server info"
ERROR_DB_COLLATION = "Error retrieving database collation"
ERROR_COLLATION_MISMATCHES = "Error retrieving collation mismatches"

# Log messages
LOG_RUNNING_TOOL = "Running tool %s"
LOG_TOOL_FAILED = "%s: %s"
LOG_REJECTED_TABLE_NAMES = "Tool %s rejected table names: %s"
LOG_REGISTERED_TOOLS = "Registered %d tools"
