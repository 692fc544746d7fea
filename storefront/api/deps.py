from fastapi import HTTPException
from storefront.db.session import SessionLocal
from storefront.errors import CheckoutError

def get_db():
    db = SessionLocal()
    try: yield db
    finally: db.close()

def http_error(exc: CheckoutError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())
