"""Prompt titles, descriptions and instruction texts.

Texts are ``str.format`` templates; ``{server_name}`` is the name the server
announces to clients, so the instructions point at its own tools. Literal
braces are doubled.
"""

TITLE_OPTIMIZE_QUERY = "Optimize Query"
DESC_OPTIMIZE_QUERY = "Optimize SQL queries for better performance"

TITLE_OPTIMIZE_INDEXES = "Optimize Indexes"
DESC_OPTIMIZE_INDEXES = "Optimize indexes on specified tables."

ARG_QUERY = "SQL query to optimize"
ARG_TABLE_NAMES = "Comma-separated names of the tables whose indexes should be optimized"

OPTIMIZE_QUERY_TEXT = """\
You will be provided with an MSSQL query. First, identify the tables involved in the query; it is imperative not to omit any tables. Fetch the schema information for the tables involved in the query using only tools from the “{server_name}” MCP server. If no query is provided, inform the user that a query is necessary to proceed.

Once you have relevant context about the database, suggest database schema-level optimizations and optimize the query efficiency on the code level. Verify your assumptions and suggestions against the provided data, and take as much time as needed to think.

Focus on identifying inefficient indexes and suggest removing them. Also, provide options for index consolidation, where possible. Analyze missing indexes and include them if necessary. After that, analyze the query and consider whether you can think of additional indexes that could enhance the performance. However, be sure to pay attention to avoid making redundant indexes. When creating new indexes, ensure they are placed within the context of existing ones.

Focus on strategic index optimization. For example, if the query is parametrized, do not optimize for the current values. Instead, focus on optimization that would benefit the query regardless of the values.

Do not limit yourself only to indexing optimizations. If you can think of other techniques that are more suitable, based on the size of the tables or other factors, please suggest them.

For each recommendation, explain why it's beneficial and document it in the file.
Important: do not make up optimizations if they are unnecessary. If the query is already efficient and the tables have decent indexing, inform the user about this. Do not create the files if no optimizations are necessary.

Schema-level optimizations should be written in a separate file called “{{QUERY FILE NAME}}_schema_optimizations.sql”. Document every optimization you suggest so the user understands why it is necessary. Always include the code to update statistics on the tables that were optimized.
Query code changes should be written to the provided file so a user can see the difference.

Include the file with the rollback steps of all the suggested optimizations in the file "{{QUERY FILE NAME}}_rollback_script.sql".
"""

OPTIMIZE_QUERY_SUFFIX = """
Query:
{query}
"""

OPTIMIZE_INDEXES_TEXT = """\
Fetch the information about existing and missing indexes for these tables: {table_names}, using only tools from the “{server_name}” MCP server. If you receive an error from any of the tools, stop right away and inform the user about the error. If no tables are provided, inform the user that at least one table is necessary to proceed.

Once you have relevant context about the tables, suggest indexing optimizations. Verify your assumptions and suggestions against the provided data, and take as much time as needed to think.

Focus on identifying inefficient indexes and suggest removing them.  Also, provide options for index consolidation, where possible. Analyze missing indexes and include them if necessary. However, be sure to pay attention to avoid making redundant indexes.

Important: do not make up optimizations if they are unnecessary. If the tables have decent indexing, inform the user about this and suggest scheduling maintenance that will keep the indexes healthy.

Indexing optimizations should be written in a file called "index_optimizations.sql". Document every optimization you suggest so the user understands why it is necessary. Always include the code to update statistics on the tables that were optimized.

Include the file with the rollback steps of all the suggested optimizations in the file "rollback_script.sql"

Include the file "index_maintenance.sql," which contains scheduled stored procedures that maintain the health of indexes. For example (but not limited to), include scheduled statistics updates and scheduled fragmentation treatment.
"""
