from sqlalchemy import (create_engine, select, insert, update, delete, MetaData,
                        Table, Column, Integer, String, Float, Boolean, CheckConstraint)
import os
from dotenv import load_dotenv

from app.book.query import BOOK_FIELDS, compile_filter, compile_update

load_dotenv()
DB_URL = os.getenv('DATABASE_URL', 'sqlite:///alpha.db')
BOOK_TABLE = os.getenv('BOOK_TABLE', 'books')

metadata = MetaData()

book_table = Table(
    BOOK_TABLE,
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('book_id', String(16), nullable=False),
    Column('title', String(255), nullable=False),
    Column('author', String(255), nullable=False),
    Column('category', String(64), nullable=False),
    Column('price', Float, nullable=False),
    Column('in_stock', Boolean, nullable=False),
    CheckConstraint('price >= 0', name='ck_%s_price_non_negative' % BOOK_TABLE),
)

book_columns = [book_table.c[field] for field in BOOK_FIELDS]


def _target(where, limit_one=False):
    condition = None if where is None else compile_filter(where, book_table)
    if not limit_one:
        return condition

    first_match = select(book_table.c.id)
    if condition is not None:
        first_match = first_match.where(condition)
    first_match = first_match.order_by(book_table.c.id).limit(1).correlate(None)
    return book_table.c.id.in_(first_match)


def reset_books():
    engine = create_engine(DB_URL)

    book_table.drop(engine, checkfirst=True)
    book_table.create(engine)

    engine.dispose()


def insert_books(books):
    params = [
        {
            'book_id': book.book_id,
            'title': book.title,
            'author': book.author,
            'category': book.category,
            'price': book.price,
            'in_stock': book.in_stock
        }
        for book in books
    ]

    with create_engine(DB_URL).connect() as conn:
        conn.execute(insert(book_table), params)
        conn.commit()
    return len(params)


def select_books(where=None, sort_field=None, descending=False):
    query = select(*book_columns)

    condition = _target(where)
    if condition is not None:
        query = query.where(condition)

    if sort_field is not None:
        if sort_field not in BOOK_FIELDS:
            raise ValueError("unknown book field: %r" % (sort_field,))
        column = book_table.c[sort_field]
        query = query.order_by(column.desc() if descending else column.asc())
    query = query.order_by(book_table.c.id)

    with create_engine(DB_URL).connect() as conn:
        result = conn.execute(query).fetchall()
    return result


def update_books(where, actions, limit_one=False):
    statement = update(book_table).values(**compile_update(actions, book_table))

    condition = _target(where, limit_one)
    if condition is not None:
        statement = statement.where(condition)

    with create_engine(DB_URL).connect() as conn:
        matched = conn.execute(statement).rowcount
        conn.commit()
    return matched


def delete_books(where, limit_one=False):
    statement = delete(book_table)

    condition = _target(where, limit_one)
    if condition is not None:
        statement = statement.where(condition)

    with create_engine(DB_URL).connect() as conn:
        deleted = conn.execute(statement).rowcount
        conn.commit()
    return deleted
