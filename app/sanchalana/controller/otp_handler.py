import asyncio
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import secrets
import smtplib
from sanchalana.constant_file import (sanchalana_email,
                                      sanchalana_email_password,
                                      smtp_host,
                                      smtp_port,
                                      otp_sign_in_subject,
                                      otp_expire_minutes)

logger = logging.getLogger(__name__)


def generate_otp():
    return ''.join(secrets.choice('0123456789') for _ in range(6))

async def send_email(email: str, otp: str):
    def send_blocking_email():
        # synchronous, runs in a worker thread
        try:
            message = MIMEMultipart()
            message['From'] = sanchalana_email
            message['To'] = email
            message['Subject'] = otp_sign_in_subject

            email_message = f"Your sign-in code is <b>{otp}</b>. This code will expire in {otp_expire_minutes} minutes."
            message.attach(MIMEText(email_message, 'html'))

            server = smtplib.SMTP(smtp_host, smtp_port)
            server.starttls()
            server.login(sanchalana_email, sanchalana_email_password)
            server.sendmail(sanchalana_email, email, message.as_string())
            server.quit()
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP error sending code to %s: %s", email, e)
            return False

    return await asyncio.to_thread(send_blocking_email)
