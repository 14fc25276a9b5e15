from fastapi import Response

from sanchalana.exceptions import FestError


def ResponseModel(data, message):
    return {
        "data": data,
        "code": 200,
        "message": message,
    }


def ErrorResponseModel(error, code, message):
    return {"error": error, "code": code, "message": message}


def ErrorFromException(response: Response, exc: FestError):
    response.status_code = exc.status_code
    return ErrorResponseModel(exc.code, exc.status_code, exc.message)
