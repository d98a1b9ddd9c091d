def format_price(price):
    return "%s" % price

def format_book(book):
    return "book_id: %s | title: %s | author: %s | category: %s | price: %s | in_stock: %s" % (
        book["book_id"],
        book["title"],
        book["author"],
        book["category"],
        format_price(book["price"]),
        "true" if book["in_stock"] else "false",
    )

def format_report(title, books):
    lines = ["%s (%d)" % (title, len(books))]
    if not books:
        lines.append("  (no matching books)")
    for book in books:
        lines.append("  " + format_book(book))
    return "\n".join(lines)
