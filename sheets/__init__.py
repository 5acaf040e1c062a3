# Sheet schema registry: versioned field/header mappings for spreadsheet tables.
