# @route /users [POST]


async def post(request):
    data = await request.json()
    name = data.get("name") if isinstance(data, dict) else None
    if not name:
        return ({"error": "name is required"}, 422)
    return ({"id": 1, "name": name}, 201)
