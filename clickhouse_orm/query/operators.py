# Maps operator tags from a FilterSpec to their SQL rendering.
# For example, `{"age": {"gte": 18}}` uses the 'gte' key to emit `age >= '18'`.
OPERATOR_MAP = {
    'eq': '=',            # Equal
    'ne': '!=',           # Not Equal
    'gt': '>',            # Greater Than
    'gte': '>=',          # Greater Than or Equal
    'lt': '<',            # Less Than
    'lte': '<=',          # Less Than or Equal
    'like': 'LIKE',       # String LIKE
    'in': 'IN',           # In a list of values
    'notIn': 'NOT IN',    # Not in a list of values
}

# Python-style spellings accepted for the same tags.
OPERATOR_ALIASES = {
    'not_in': 'notIn',
}

# Operators that expect a list of values.
LIST_OPERATORS = {'in', 'notIn'}

# Operators with an IS [NOT] NULL form when the value is None.
NULL_OPERATORS = {
    'eq': 'IS NULL',
    'ne': 'IS NOT NULL',
}
