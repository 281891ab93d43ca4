import sys

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tutorhub import config, database
from tutorhub.app_logger import get_logger
from tutorhub.auth.auth_router import router as auth_router
from tutorhub.catalog.book_router import router as book_router
from tutorhub.catalog.lesson_router import router as lesson_router
from tutorhub.catalog.subscription_router import router as subscription_router
from tutorhub.exams.exam_router import router as exam_router
from tutorhub.messaging.general_message_router import router as general_message_router
from tutorhub.messaging.notification_router import router as notification_router
from tutorhub.messaging.student_message_router import router as student_message_router
from tutorhub.orders.book_order_router import router as book_order_router
from tutorhub.payments.payment_method_router import router as payment_method_router
from tutorhub.payments.purchase_router import router as purchase_router
from tutorhub.payments.transfer_router import router as transfer_router
from tutorhub.rewards.reward_router import router as reward_router
from tutorhub.support.support_router import router as support_router
from tutorhub.system.health_router import router as health_router
from tutorhub.users.student_router import router as student_router

logger = get_logger()

app = FastAPI(title="Tutoring Platform API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    try:
        db = await database.connect()
        await database.create_indexes(db)
    except Exception:
        logger.exception("MongoDB connection error")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    database.close()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed request fields are a 400"""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body.", "errors": jsonable_encoder(exc.errors())},
    )


# ==================== ROUTER REGISTRATION ====================
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(student_router)
app.include_router(lesson_router)
app.include_router(subscription_router)
app.include_router(book_router)
app.include_router(payment_method_router)
app.include_router(transfer_router)
app.include_router(purchase_router)
app.include_router(general_message_router)
app.include_router(student_message_router)
app.include_router(notification_router)
app.include_router(book_order_router)
app.include_router(exam_router)
app.include_router(reward_router)
app.include_router(support_router)
# ============================================================


def run():
    """Console entry point; refuses to start without a connection string"""
    import uvicorn

    if not config.MONGODB_URI:
        logger.error("MONGODB_URI is not defined in environment variables.")
        sys.exit(1)

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
