from starlette import status


class TollGateError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldError(TollGateError):
    pass


class UnknownInterchangeError(TollGateError):
    pass


class InvalidNumberPlateError(TollGateError):
    pass


class InvalidTimeOrderingError(TollGateError):
    pass


class DuplicateEntryError(TollGateError):
    status_code = status.HTTP_409_CONFLICT


class NoOpenEntryError(TollGateError):
    status_code = status.HTTP_404_NOT_FOUND


class UnexpectedError(TollGateError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
