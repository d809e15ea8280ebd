from config import settings
from models import Notification, NotificationOptions, PushPayload

def build_notification(payload: PushPayload) -> Notification:
    return Notification(
        title=payload.title,
        options=NotificationOptions(
            body=payload.body,
            icon=settings.notification_icon,
            badge=settings.notification_badge,
            vibrate=list(settings.notification_vibrate),
            tag=settings.notification_tag,
        ),
    )
