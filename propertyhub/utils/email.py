import os
import html
import logging
import resend
from flask import current_app

logger = logging.getLogger(__name__)


def send_recommendation_email(to_email, sender_name, property_details):
    """Tell a user that someone recommended a property to them, using Resend."""
    try:
        resend.api_key = os.environ.get('RESEND_API_KEY')
        if not resend.api_key:
            logger.warning("RESEND_API_KEY is not set. Recommendation email not sent.")
            return False

        frontend_url = current_app.config['FRONTEND_URL'].split(',')[0]
        recommendations_link = f"{frontend_url}/recommendations"
        title = property_details.get('title') or 'a property'
        location = ', '.join(
            part for part in (property_details.get('city'), property_details.get('state'), property_details.get('country')) if part
        )
        price = property_details.get('price')
        price_text = f"{price:,.2f}" if price is not None else 'N/A'

        safe_sender = html.escape(sender_name)
        safe_title = html.escape(title)
        safe_location = html.escape(location or 'N/A')
        safe_listing = html.escape(property_details.get('listingType') or 'N/A')

        html_content = f"""
        <div style="font-family: Arial, sans-serif; padding: 20px; color: #333;">
            <div style="background-color: {property_details.get('colorTheme') or '#6ab45e'}; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0;">
                <h2 style="margin: 0; font-size: 24px;">{safe_sender} recommended a property for you</h2>
            </div>
            <div style="background-color: #f9f9f9; padding: 30px; border-radius: 0 0 8px 8px;">
                <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
                    <tr><td style="padding: 8px; border-bottom: 1px solid #ddd;"><b>Property:</b></td><td style="padding: 8px; border-bottom: 1px solid #ddd;">{safe_title}</td></tr>
                    <tr><td style="padding: 8px; border-bottom: 1px solid #ddd;"><b>Location:</b></td><td style="padding: 8px; border-bottom: 1px solid #ddd;">{safe_location}</td></tr>
                    <tr><td style="padding: 8px; border-bottom: 1px solid #ddd;"><b>Price:</b></td><td style="padding: 8px; border-bottom: 1px solid #ddd;">{price_text}</td></tr>
                    <tr><td style="padding: 8px; border-bottom: 1px solid #ddd;"><b>Listing:</b></td><td style="padding: 8px; border-bottom: 1px solid #ddd;">{safe_listing}</td></tr>
                </table>
                <center>
                    <a href="{recommendations_link}" style="display: inline-block; background-color: #2196F3; color: white; padding: 15px 30px; text-decoration: none; border-radius: 4px; margin: 20px 0; font-weight: bold;">View Recommendations</a>
                </center>
            </div>
        </div>
        """

        params = {
            "from": current_app.config['MAIL_FROM'],
            "to": [to_email],
            "subject": f"{sender_name} recommended {title} - PropertyHub",
            "html": html_content
        }

        resend.Emails.send(params)
        return True
    except Exception as e:
        logger.error(f"Failed to send recommendation email: {e}")
        return False
