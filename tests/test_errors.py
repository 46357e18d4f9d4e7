from apigen.errors import DecodeParamsError, DecodeRequestError, OperationError, SecurityError


def test_decode_params_error():
    cause = ValueError("bad")
    err = DecodeParamsError("getPet", cause)
    assert str(err) == "operation getPet: decode params: bad"
    assert err.operation_id() == "getPet"
    assert err.code() == 400
    assert err.__cause__ is cause


def test_decode_request_error():
    err = DecodeRequestError("op", ValueError("x"))
    assert str(err).startswith("operation op: decode request: ")
    assert isinstance(err, OperationError)


def test_security_error():
    err = SecurityError("op", "api_key", ValueError("x"))
    assert str(err) == 'operation op: security "api_key": x'
    assert err.code() == 400
    assert err.security == "api_key"