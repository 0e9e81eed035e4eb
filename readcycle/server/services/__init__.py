"""
Service layer of the ReadCycle server.

Routers stay thin: they resolve dependencies, call one service method and
wrap the result in the response envelope. Services hold the business rules
and raise ``ApiError`` subclasses on failure.
"""
