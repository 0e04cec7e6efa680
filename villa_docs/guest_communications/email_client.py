# guest_communications/email_client.py
import smtplib
from dataclasses import dataclass
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import parseaddr
from typing import List, Optional

from config.settings import EmailConfig


@dataclass
class EmailAttachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class EmailClient:
    def __init__(self, config: EmailConfig):
        self.config = config
        self.smtp_server = config.smtp_server
        self.smtp_port = config.smtp_port
        self.username = config.username

    def build_message(self, to: str, subject: str, html: str,
                      attachments: Optional[List[EmailAttachment]] = None,
                      sender: Optional[str] = None) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["Subject"] = subject
        msg["From"] = sender or self.config.sender
        msg["To"] = to
        msg.attach(MIMEText(html, "html", "utf-8"))

        for attachment in attachments or []:
            subtype = attachment.content_type.split("/", 1)[-1]
            part = MIMEApplication(attachment.content, _subtype=subtype)
            part.replace_header("Content-Type", attachment.content_type)
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            msg.attach(part)
        return msg

    def send(self, to: str, subject: str, html: str,
             attachments: Optional[List[EmailAttachment]] = None,
             sender: Optional[str] = None):
        """Send an HTML email over SMTP. Raises on any transport error."""
        msg = self.build_message(to, subject, html, attachments, sender)
        envelope_from = parseaddr(msg["From"])[1] or self.username

        with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
            if self.config.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.config.password)
            server.sendmail(envelope_from, [to], msg.as_string())
