"""
Operator vocabulary shared by the validator and the query builder.
"""


class Operator:
    # Comparison
    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"

    # Logical
    AND = "$and"
    OR = "$or"
    NOT = "$not"
    NOR = "$nor"

    # Element
    EXISTS = "$exists"
    TYPE = "$type"

    # String/Pattern
    REGEX = "$regex"

    # Array
    ALL = "$all"
    ELEM_MATCH = "$elemMatch"
    SIZE = "$size"


# Operators that group child conditions instead of comparing a field
LOGICAL_OPERATORS = frozenset({Operator.AND, Operator.OR, Operator.NOR})

# Marks a string value as a dotted path into the data bag
REFERENCE_PREFIX = "$"
