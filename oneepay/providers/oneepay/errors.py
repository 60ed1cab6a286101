import httpx

from oneepay.common.exceptions import RemoteError


def normalize_error(exc: httpx.HTTPError) -> Exception:
    """Map a failed gateway call onto the error the caller should see.

    Returns ``exc`` itself when there is nothing better to report: a network
    failure without a response, or a body without a recognised error shape.
    """
    if not isinstance(exc, httpx.HTTPStatusError):
        return exc
    response = exc.response

    try:
        body = response.json()
    except ValueError:
        return exc
    if not isinstance(body, dict):
        return exc

    errors = body.get("errors")
    message = body.get("message")
    reason = body.get("reason")

    if isinstance(errors, list) and errors:
        first = errors[0]
        text = first.get("message") if isinstance(first, dict) else first
        # An entry without a message defers to the top-level message/reason.
        if text:
            return RemoteError(str(text), status_code=response.status_code, body=body)
    if message and reason:
        return RemoteError(f"{message} {reason}", status_code=response.status_code, body=body)
    if message:
        return RemoteError(str(message), status_code=response.status_code, body=body)
    return exc
