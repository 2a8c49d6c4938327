"""
Frozen pydantic value models for engine inputs and outputs.

Every structure is call-scoped: it is built by one engine call and returned
to the caller, which owns persistence.  Validators reject impossible values
(negative prices, confidences outside [0, 1]) at construction time.
"""
