import os
import httpx
import json
from typing import Tuple, Dict, Any
from dotenv import load_dotenv
from estate_enquiry.config.logging import get_logger

load_dotenv()

logger = get_logger(__name__)

class EmailService:
    def __init__(self):
        self.mailgun_url = os.getenv("MAILGUN_URL")
        self.mailgun_api_key = os.getenv('MAILGUN_API_KEY')
        self.mailgun_from = os.getenv("MAILGUN_FROM")
        self.notify_email = os.getenv("INQUIRY_NOTIFY_EMAIL")
        self.is_dev = os.getenv("MAILGUN_DEV", "yes") == "yes"

    async def send_simple_message(
        self,
        to_email: str,
        subject: str,
        template: str,
        template_variables: Dict[str, Any]
    ) -> Tuple[int, str]:
        # Skip sending in dev mode
        if self.is_dev:
            logger.info(
                "[DEV MODE] Email not sent",
                extra={"subject": subject, "template": template}
            )
            return 200, "Dev mode - email not sent"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.mailgun_url,
                    auth=("api", self.mailgun_api_key),
                    data={
                        "from": f"Property Enquiries <{self.mailgun_from}>",
                        "to": to_email,
                        "subject": subject,
                        "template": template,
                        "h:X-Mailgun-Variables": json.dumps(template_variables)
                    },
                    timeout=10.0
                )
            return response.status_code, response.text
        except Exception as e:
            logger.error("Error sending email", exc_info=True, extra={"template": template})
            return 500, str(e)

    async def notify_new_inquiry(self, inquiry) -> Tuple[int, str]:
        """Tell the sales inbox about a freshly submitted enquiry or tour request"""
        if not self.notify_email:
            return 204, "No notification inbox configured"

        if inquiry.inquiry_type == "tour":
            subject = f"New Tour Request - {inquiry.property_name or 'Property'}"
            template = "tour_request"
        else:
            subject = f"New Enquiry - {inquiry.property_name or 'General'}"
            template = "new_inquiry"

        return await self.send_simple_message(
            to_email=self.notify_email,
            subject=subject,
            template=template,
            template_variables={
                "visitor_name": inquiry.name,
                "visitor_email": inquiry.email,
                "visitor_phone": inquiry.phone or "Not provided",
                "property_name": inquiry.property_name or "",
                "property_location": inquiry.property_location or "",
                "configurations": ", ".join(inquiry.property_configurations or []),
                "tour_date": inquiry.tour_date.isoformat() if inquiry.tour_date else "",
                "tour_time": inquiry.tour_time or "",
                "tour_type": ", ".join(inquiry.tour_type or []),
                "message": inquiry.message,
            }
        )
