def serialize(items):
    """
    Helper to turn a list of models into JSON-ready dicts
    """
    return [item.to_dict() for item in items]


def paginated(page):
    return {
        'items': serialize(page.items),
        'page': page.page,
        'per_page': page.per_page,
        'total': page.total,
        'pages': page.pages,
    }
