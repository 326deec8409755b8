from pydantic import BaseModel

# Schema for a stored user record.
# The email doubles as the key the record is stored under.
# The password is kept exactly as sent (no hashing).
class User(BaseModel):
    name: str
    email: str
    password: str

# Schema for the root endpoint response
class Message(BaseModel):
    message: str
