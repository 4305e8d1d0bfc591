"""Liquid templates for outgoing emails."""

ACCOUNT_REGISTER_SUBJECT = "Verify your email address"

ACCOUNT_REGISTER_TEXT = """\
Hi {{ full_name | default: email }},

Thanks for signing up. Confirm your email address to activate your account:

{{ verify_url }}

If you did not create an account, you can ignore this message.
"""

ACCOUNT_REGISTER_HTML = """\
<p>Hi {{ full_name | default: email | escape }},</p>
<p>Thanks for signing up. Confirm your email address to activate your account:</p>
<p><a href="{{ verify_url | escape }}">Verify email</a></p>
<p>If you did not create an account, you can ignore this message.</p>
"""
