from typing import Union

from oneepay.common.hashing import digest


def sign(
    uid: str,
    total_amount: Union[str, int, float],
    total_quantity: int,
    ip: str,
    client_id: str,
    client_secret: str,
) -> str:
    """Transaction signature verified by the gateway.

    Field order and the absence of a delimiter are part of the wire contract.
    """
    data = f"{uid}{total_amount}{total_quantity}{ip}{client_id}{client_secret}"
    return digest(data)
