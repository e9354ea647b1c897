from enum import Enum


class Aspect(str, Enum):
    READ_OPERATION = "read_operation"
    WRITE_OPERATION = "write_operation"
    RETRYABLE = "retryable"
    EXECUTE_WITH_SELECTION = "execute_with_selection"
