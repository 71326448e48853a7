DEFAULT_TEMPLATES = [
    {
        "id": "email_follow_up",
        "name": "Professional Email Follow-Up",
        "description": "Follow-up email after no response",
        "body": (
            "Subject: Follow-up on {{topic}}\n\n"
            "Hi {{recipientName}},\n\n"
            "I hope you are well. I wanted to follow up regarding {{topic}} that we discussed on {{date}}. "
            "Please let me know if you have any updates or questions.\n\n"
            "Best regards,\n"
            "{{senderName}}"
        ),
    },
    {
        "id": "bug_report",
        "name": "Structured Bug Report",
        "description": "Template to report a software bug clearly",
        "body": (
            "Title: {{title}}\n\n"
            "Environment: {{environment}}\n"
            "Steps to Reproduce:\n"
            "1) {{step1}}\n"
            "2) {{step2}}\n"
            "Expected: {{expected}}\n"
            "Actual: {{actual}}\n"
            "Additional Notes: {{notes}}"
        ),
    },
]
