import json
import threading

from minilisp.interpreter import Interpreter
from minilisp.types.procedure import BuiltinProcedure, ProcedureSignature
from minilisp_lsp.repl_server import ReplServer


def _server():
    return ReplServer(host="127.0.0.1", port=0, interp=Interpreter(prelude=None))


def test_eval_request():
    server = _server()
    resp = server.handle_request({"cmd": "eval", "code": "(define x 2) (* x 3)"})
    assert resp == {"ok": True, "results": ["#<void>", "6"]}


def test_definitions_persist_between_requests():
    server = _server()
    server.handle_request({"cmd": "eval", "code": "(define x 2)"})
    assert server.handle_request({"cmd": "eval", "code": "x"})["results"] == ["2"]


def test_error_reports_earlier_results():
    server = _server()
    resp = server.handle_request({"cmd": "eval", "code": '"ok" nope 3'})
    assert resp["ok"] is False
    assert resp["results"] == ['"ok"']
    assert "nope" in resp["error"]


def test_reset_request():
    server = _server()
    server.handle_request({"cmd": "eval", "code": "(define x 2)"})
    assert server.handle_request({"cmd": "reset"}) == {"ok": True, "results": []}
    resp = server.handle_request({"cmd": "eval", "code": "(define x 3) x"})
    assert resp == {"ok": True, "results": ["#<void>", "3"]}


def test_bad_requests():
    server = _server()
    assert server.handle_request({"cmd": "launch"})["ok"] is False
    assert server.handle_request(["eval"])["ok"] is False
    assert server.handle_request({"cmd": "eval", "code": 1})["ok"] is False
    assert server.handle_line(b"{not json")["ok"] is False


def test_handle_line_decodes_json():
    server = _server()
    resp = server.handle_line(json.dumps({"cmd": "eval", "code": "(+ 1 2)"}).encode("utf-8"))
    assert resp == {"ok": True, "results": ["3"]}


def test_concurrent_requests_are_serialized():
    server = _server()
    server.handle_request({"cmd": "eval", "code": "(define n 0)"})

    def bump():
        for _ in range(20):
            server.handle_request({"cmd": "eval", "code": "(set! n (+ n 1))"})

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert server.handle_request({"cmd": "eval", "code": "n"})["results"] == ["80"]


def test_unexpected_failure_becomes_error_reply():
    def explode(args):
        raise KeyError("missing")

    boom = BuiltinProcedure("boom", ProcedureSignature(), explode)
    server = ReplServer(host="127.0.0.1", port=0, interp=Interpreter(prelude=None, builtins=[boom]))
    resp = server.handle_line(json.dumps({"cmd": "eval", "code": "(boom)"}).encode("utf-8"))
    assert resp["ok"] is False
    assert "KeyError" in resp["error"]
    assert server.handle_line(b'{"cmd": "eval", "code": "(+ 1 2)"}') == {"ok": True, "results": ["3"]}
