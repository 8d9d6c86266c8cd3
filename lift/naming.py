def normalize_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def normalize_function_name(name: str) -> str:
    return normalize_name(name.replace("-", "Dash").replace("_", "Underscore"))


class Naming:
    """
    Logical ids used by the Serverless Framework for the resources it generates.
    Functions declared by the service stack use the same ids, so the constructs
    can reference them by function name.
    """

    def get_lambda_logical_id(self, function_name: str) -> str:
        return f"{normalize_function_name(function_name)}LambdaFunction"

    def get_lambda_function_url_logical_id(self, function_name: str) -> str:
        return f"{normalize_function_name(function_name)}LambdaFunctionUrl"
