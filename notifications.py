"""
Local notification service for pet finder
v1.0.0

Schedules and delivers:
- A daily reminder about new animals at the user's preferred hour
- An immediate notification for each newly unlocked achievement

Requests are kept in the local store until delivered. Delivery prints
each notification and, when SMTP is configured, emails them as well.
"""
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List, Dict, Optional
from datetime import datetime

from config import EMAIL_CONFIG, DAILY_REMINDER_ID, DAILY_REMINDER
from schema import NotificationRequest, TriggerType, next_daily_fire_time


class NotificationService:
  """Manages pending local notifications"""

  def __init__(self, dal, email_config: Optional[Dict] = None):
    self.dal = dal
    self.email_config = email_config if email_config is not None else EMAIL_CONFIG

  # ============================================
  # Scheduling
  # ============================================

  def schedule_daily_reminder(self, hour: int, minute: int = 0,
                              now: Optional[datetime] = None) -> bool:
    """
    Schedule the recurring daily reminder, replacing any previous one.
    """
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
      raise ValueError(f"Invalid reminder time {hour}:{minute}")

    now = now or datetime.now()
    request = NotificationRequest(
      identifier=DAILY_REMINDER_ID,
      title=DAILY_REMINDER["title"],
      body=DAILY_REMINDER["body"],
      trigger_type=TriggerType.DAILY.value,
      hour=hour,
      minute=minute,
      repeats=True,
      fire_at=next_daily_fire_time(hour, minute, now).isoformat(),
    )

    saved = self.dal.save_notification_request(request)
    if saved:
      print(f"✅ Daily notification scheduled for {hour:02d}:{minute:02d}")
    else:
      print("❌ Could not schedule daily notification")
    return saved

  def notify_now(self, identifier: str, title: str, body: str,
                 now: Optional[datetime] = None) -> bool:
    """Queue a one-shot notification that is due immediately"""
    now = now or datetime.now()
    request = NotificationRequest(
      identifier=identifier,
      title=title,
      body=body,
      trigger_type=TriggerType.IMMEDIATE.value,
      fire_at=now.isoformat(),
    )
    saved = self.dal.save_notification_request(request)
    if not saved:
      print(f"❌ Could not queue notification '{identifier}'")
    return saved

  def cancel(self, identifier: str) -> bool:
    removed = self.dal.delete_notification_request(identifier)
    if removed:
      print(f"🔕 Notification '{identifier}' cancelled")
    return removed

  def cancel_all(self) -> bool:
    removed = self.dal.delete_all_notification_requests()
    if removed:
      print("🔕 All pending notifications cancelled")
    return removed

  def pending(self) -> List[NotificationRequest]:
    return self.dal.get_notification_requests()

  def apply_settings(self, preferences, now: Optional[datetime] = None) -> bool:
    """
    Bring the daily reminder in line with the notification settings.
    A reminder already set for the same time keeps its fire time, so one
    that is due but not yet delivered isn't pushed to the next day.
    """
    existing = self.dal.get_notification_request(DAILY_REMINDER_ID)
    if preferences.daily_notifications_enabled:
      hour = preferences.notification_hour
      if existing and existing.fire_at and existing.hour == hour and existing.minute == 0:
        return True
      return self.schedule_daily_reminder(hour, now=now)
    if existing:
      return self.cancel(DAILY_REMINDER_ID)
    return True

  # ============================================
  # Delivery
  # ============================================

  def deliver_due(self, now: Optional[datetime] = None) -> List[NotificationRequest]:
    """
    Deliver every request whose fire time has passed.

    One-shot requests are removed afterwards; daily ones move to their
    next occurrence.
    """
    now = now or datetime.now()
    due = [r for r in self.pending() if r.is_due(now)]

    if not due:
      print("  ℹ️ No notifications due")
      return []

    for request in due:
      print(f"  🔔 {request.title} | {request.body}")

    if self.is_email_configured():
      self.send_email(due)

    for request in due:
      if request.repeats and request.hour is not None:
        request.delivered_at = now.isoformat()
        request.fire_at = next_daily_fire_time(request.hour, request.minute or 0, now).isoformat()
        self.dal.save_notification_request(request)
      else:
        self.dal.delete_notification_request(request.identifier)

    return due

  def is_email_configured(self) -> bool:
    """Check if email is properly configured"""
    return bool(
      self.email_config.get("sender_email")
      and self.email_config.get("sender_password")
      and self.email_config.get("recipient_emails")
    )

  def send_email(self, requests: List[NotificationRequest]) -> bool:
    """Send delivered notifications as a single email"""
    subject, html_body = format_notification_email(requests)

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = self.email_config["sender_email"]
    msg["To"] = ", ".join(self.email_config["recipient_emails"])
    msg.attach(MIMEText(html_body, "html"))

    try:
      with smtplib.SMTP(self.email_config["smtp_server"], self.email_config["smtp_port"]) as server:
        server.starttls()
        server.login(self.email_config["sender_email"], self.email_config["sender_password"])
        server.send_message(msg)

      print(f"  ✅ Notification email sent: {len(requests)} notification(s)")
      return True

    except (smtplib.SMTPException, OSError) as e:
      print(f"  ❌ Failed to send notification email: {e}")
      return False


def format_notification_email(requests: List[NotificationRequest]) -> tuple:
  """Format notifications into email subject and body"""
  if len(requests) == 1:
    subject = requests[0].title
  else:
    subject = f"🐾 Pet Finder: {len(requests)} notifications"

  html = """
  <html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6;">
    <h1>🐾 Pet Finder</h1>
    <p>Generated: {timestamp}</p>
  """.format(timestamp=datetime.now().strftime("%Y-%m-%d %H:%M"))

  for request in requests:
    html += f"""
    <div style="margin: 10px 0; padding: 10px; border-radius: 4px; background: #f5f5f5;">
      <strong>{request.title}</strong><br>
      {request.body}
    </div>
    """

  html += """
  </body>
  </html>
  """

  return subject, html
