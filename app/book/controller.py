from pydantic import BaseModel, Field
from app.book.model import (
    reset_books,
    insert_books,
    select_books,
    update_books,
    delete_books,
)

book_db = [
    {"book_id": "B001", "title": "Data Science Fundamentals", "author": "John Smith", "category": "Technology", "price": 29.99, "in_stock": True},
    {"book_id": "B002", "title": "Learning MongoDB", "author": "Jane Doe", "category": "Technology", "price": 35.99, "in_stock": False},
    {"book_id": "B003", "title": "Web Development with JavaScript", "author": "Mark Lee", "category": "Programming", "price": 24.99, "in_stock": True},
    {"book_id": "B004", "title": "Introduction to Python", "author": "Alice Brown", "category": "Programming", "price": 19.99, "in_stock": True},
    {"book_id": "B005", "title": "Advanced SQL Queries", "author": "Michael White", "category": "Database", "price": 45.99, "in_stock": True},
    {"book_id": "B006", "title": "C++ Basics", "author": "John Smith", "category": "Programming", "price": 29.99, "in_stock": True},
    {"book_id": "B007", "title": "Machine Learning with Python", "author": "Sara Green", "category": "Technology", "price": 39.99, "in_stock": True},
    {"book_id": "B008", "title": "Deep Learning Essentials", "author": "David Grey", "category": "Technology", "price": 59.99, "in_stock": False},
    {"book_id": "B009", "title": "Data Structures in Java", "author": "Lucas Blue", "category": "Programming", "price": 49.99, "in_stock": True},
    {"book_id": "B010", "title": "Artificial Intelligence", "author": "Sophia Grey", "category": "Technology", "price": 69.99, "in_stock": True},
]

class Book(BaseModel):
    book_id: str
    title: str
    author: str
    category: str
    price: float = Field(ge=0)
    in_stock: bool

def _to_books(rows):
    return [Book(**dict(row._mapping)).model_dump() for row in rows]

def seed_books():
    books = [Book(**item) for item in book_db]
    reset_books()
    inserted = insert_books(books)

    status = "success"
    message = "Collection reset, %d books inserted" % inserted
    return {
        "status": status,
        "message": message,
        "data": _to_books(select_books())
    }

def get_books(where=None, sort_field=None, descending=False):
    result = _to_books(select_books(where, sort_field, descending))

    status = "success"
    message = "%d books retrieved" % len(result)
    return {
        "status": status,
        "message": message,
        "data": result
    }

def edit_books(where, actions, limit_one=False):
    matched = update_books(where, actions, limit_one)

    status = "success"
    message = "%d books matched for update" % matched
    return {
        "status": status,
        "message": message,
        "data": {"matched": matched}
    }

def remove_books(where, limit_one=False):
    deleted = delete_books(where, limit_one)

    status = "success"
    message = "%d books deleted" % deleted
    return {
        "status": status,
        "message": message,
        "data": {"deleted": deleted}
    }
