import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from flask import current_app

logger = logging.getLogger(__name__)

class NotificationService:
    @staticmethod
    def send_new_enquiry_notification(enquiry_data):
        """
        신규 문의 접수 시 관리자에게 이메일 알림을 보냅니다.
        SMTP 설정이 없으면 로그만 출력합니다. 알림 실패는 접수 결과에 영향을 주지 않습니다.
        """
        name = enquiry_data.get('uname') or 'unknown'
        email = enquiry_data.get('email') or '-'
        mobile = enquiry_data.get('mobile') or '-'

        message = f"[New enquiry #{enquiry_data.get('id')}] Name: {name} / Email: {email} / Mobile: {mobile}"

        return NotificationService.send_email(
            subject="New enquiry received",
            body=message
        )

    @staticmethod
    def send_email(subject, body):
        config = current_app.config
        smtp_user = config.get('SMTP_USER')
        smtp_pass = config.get('SMTP_PASS')
        admin_email = config.get('ADMIN_EMAIL')

        if not all([smtp_user, smtp_pass, admin_email]):
            logger.info(f"[MOCK EMAIL] To: {admin_email} | Subject: {subject} | Body: {body}")
            logger.info("  => SMTP settings missing, no mail was sent.")
            return False

        try:
            msg = MIMEMultipart()
            msg['From'] = smtp_user
            msg['To'] = admin_email
            msg['Subject'] = subject
            msg.attach(MIMEText(body, 'plain', 'utf-8'))

            with smtplib.SMTP_SSL(config.get('SMTP_HOST'), config.get('SMTP_PORT')) as server:
                server.login(smtp_user, smtp_pass)
                server.send_message(msg)

            logger.info(f"[EMAIL SENT] To: {admin_email} | Subject: {subject}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[EMAIL FAILED] {e}")
            return False
