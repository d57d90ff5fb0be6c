# @route /health [GET, HEAD]


def handle():
    return {"status": "ok"}
