"""Single user.

@route /users/:id [GET]
"""


def get(id: int):
    return {"id": id, "name": f"user-{id}"}
