"""
Context helpers using contextvars for request id propagation.
"""
import contextvars

request_id_var = contextvars.ContextVar("request_id", default=None)

def set_request_context(request_id=None):
    if request_id is not None:
        request_id_var.set(request_id)

def get_request_context():
    return {
        "request_id": request_id_var.get(),
    }
