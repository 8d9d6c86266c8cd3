INVALID_CONSTRUCT_CONFIGURATION = "LIFT_INVALID_CONSTRUCT_CONFIGURATION"


class ServerlessError(Exception):
    """
    Error reported back to the deployment tool.
    The code is stable and can be matched on, the message is meant for humans.
    """
    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message
