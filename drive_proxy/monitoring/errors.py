from drive_proxy.monitoring.logger import log
from drive_proxy.monitoring.slack_alerts import send_slack_alert


async def record_error(component: str, function: str, message: str, details: dict = None, stacktrace: str = None, request_id: str = None, severity: str = "ERROR", alert: bool = True):
    log(severity, message, component=component, request_id=request_id, function=function, details=details)
    if alert and severity in ("ERROR", "CRITICAL"):
        context = {"function": function, "details": details}
        if stacktrace:
            context["traceback"] = stacktrace
        await send_slack_alert(message=message, context=context, severity=severity, module=component, request_id=request_id)
