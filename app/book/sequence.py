from functools import partial

from sqlalchemy.exc import SQLAlchemyError

from app.book.controller import seed_books, get_books, edit_books, remove_books
from app.book.query import where, Eq, Lt, Lte, Gt, Gte, In, Or, Set, Multiply
from app.general_utility import format_report
from app.sentry_config import sentryLog


class SequenceAborted(Exception):
    def __init__(self, step, cause):
        super().__init__("sequence aborted at step %s: %s" % (step, cause))
        self.step = step
        self.cause = cause


class Step(object):
    def __init__(self, number, name, endpoint, report=None):
        self.number = number
        self.name = name
        self.endpoint = endpoint
        self.report = report

    def run(self):
        return self.endpoint()


class StepSequence(object):
    """Ordered list of book queries, run one after the other.

    Each step commits before the next one starts, so every step sees the
    state left behind by the previous ones. A storage error stops the run.
    """

    def __init__(self, flow, out=print):
        self.flow = flow
        self.steps = []
        self.out = out

    def add_step(self, name, endpoint, report=None):
        self.steps.append(Step(len(self.steps) + 1, name, endpoint, report))

    def run(self):
        results = []
        for step in self.steps:
            try:
                result = step.run()
            except SQLAlchemyError as error:
                sentryLog(flow=self.flow, step=step.number, func=step.name,
                          detail=str(error), status="failed")._error(error)
                raise SequenceAborted(step.name, error) from error

            metadata = result["data"] if isinstance(result["data"], dict) else {"count": len(result["data"])}
            sentryLog(flow=self.flow, step=step.number, func=step.name,
                      detail=result["message"], metadata=metadata,
                      status=result["status"])._info()

            if step.report:
                self.out(format_report(step.report, result["data"]))
            results.append(result)
        return results


def build_sequence(out=print):
    sequence = StepSequence(flow="books", out=out)

    sequence.add_step("reset-and-seed", seed_books, report="Initial documents")
    sequence.add_step(
        "technology-under-40-out-of-stock",
        partial(edit_books, where(Lt("price", 40), category="Technology"), [Set("in_stock", False)]),
    )
    sequence.add_step(
        "delete-b008-if-out-of-stock",
        partial(remove_books, where(book_id="B008", in_stock=False), limit_one=True),
    )
    sequence.add_step(
        "john-smith-technology-to-35",
        partial(edit_books,
                where(Gt("price", 20), author="John Smith", category="Technology", in_stock=True),
                [Set("price", 35)]),
    )
    sequence.add_step(
        "programming-over-25-in-stock",
        partial(get_books, where(Gt("price", 25), category="Programming", in_stock=True),
                sort_field="price", descending=True),
        report="Programming books price > 25 and in stock, sorted by price desc",
    )
    sequence.add_step(
        "delete-programming-out-of-stock-or-over-50",
        partial(remove_books, Or((where(category="Programming", in_stock=False), Gt("price", 50)))),
    )
    sequence.add_step(
        "b005-b006-to-40-in-stock",
        partial(edit_books, In("book_id", ("B005", "B006")), [Set("price", 40), Set("in_stock", True)]),
    )
    sequence.add_step(
        "jane-doe-or-database-30-to-60",
        partial(get_books,
                where(Or((Eq("author", "Jane Doe"), Eq("category", "Database"))),
                      Gte("price", 30), Lte("price", 60))),
        report="Books where author is Jane Doe OR category is Database, price between $30 and $60",
    )
    sequence.add_step(
        "programming-in-stock-under-50-to-50",
        partial(edit_books, where(Lt("price", 50), category="Programming", in_stock=True),
                [Set("price", 50)]),
    )
    sequence.add_step(
        "delete-technology-under-30-out-of-stock",
        partial(remove_books, where(Lt("price", 30), category="Technology", in_stock=False)),
    )
    sequence.add_step(
        "b010-retitle-and-discount",
        partial(edit_books, where(book_id="B010"),
                [Set("title", "AI Revolution"), Multiply("price", 0.9)], limit_one=True),
    )
    sequence.add_step("final-documents", get_books, report="Final documents after operations")
    sequence.add_step(
        "jane-doe-or-database-strictly-30-to-60",
        partial(get_books,
                where(Or((Eq("author", "Jane Doe"), Eq("category", "Database"))),
                      Gt("price", 30), Lt("price", 60))),
    )
    return sequence
