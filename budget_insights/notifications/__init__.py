from importlib import import_module

from budget_insights.core.alerts import ALERT_SEVERITY_TAG, dedupe_key, describe_alert
from budget_insights.utils import format_amount


def get_notifier(name, config):
    path = config['notifiers'][name]
    module_name, cls_name = path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)(config)


def dispatch_alerts(alerts, notifier, formatter=format_amount):
    """Hand each alert to ``notifier``; returns how many were accepted."""
    sent = 0
    for alert in alerts:
        title, message = describe_alert(alert, formatter)
        if notifier.send(
            alert.owner_id,
            title,
            message,
            ALERT_SEVERITY_TAG,
            dedupe_key=dedupe_key(alert),
        ):
            sent += 1
    return sent
