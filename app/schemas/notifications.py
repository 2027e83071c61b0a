from pydantic import BaseModel, EmailStr


class EmailRequest(BaseModel):
    subject: str | None = None
    message: str | None = None
    html_content: str | None = None
    email: EmailStr | None = None


class SmsRequest(BaseModel):
    message: str = "Hi, you have reminders waiting for you."
