from typing import Any
from collections.abc import Callable

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type LambdaConfiguration = dict[str, Any]
type AppConfig = dict[str, Any]

# Any request handler, including fallbacks, takes an API Gateway event and returns a proxy response
type LambdaHandler = Callable[[LambdaEvent, LambdaContext], LambdaResponse]

# Type aliases for boto3 clients
type AppConfigDataClient = BaseClient
