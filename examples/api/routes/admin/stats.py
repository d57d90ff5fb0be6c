# @route /admin/stats [GET]
# @auth admin

from fileroute import Request


def get(request: Request):
    return {"users": 1, "client": request.client[0] if request.client else None}
