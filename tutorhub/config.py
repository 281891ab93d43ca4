"""
Service configuration
All values come from the process environment
"""

import os

# MongoDB
MONGODB_URI = os.getenv("MONGODB_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "tutoring_platform")

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Password hashing cost
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# Exam pass mark (percent)
EXAM_PASS_SCORE = int(os.getenv("EXAM_PASS_SCORE", "50"))

# Teacher login is a fixed credential check, not an account lookup.
# There is no teacher registration or password verification behind it.
TEACHER_NAME = os.getenv("TEACHER_NAME", "Mahmoud only")
TEACHER_CODE = os.getenv("TEACHER_CODE", "HHDV/58HR")
TEACHER_PHONE = os.getenv("TEACHER_PHONE", "01050747978")
TEACHER_PLACEHOLDER_PASSWORD = "teacher_default_password"
