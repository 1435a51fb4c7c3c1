from rest_framework import status
from rest_framework.response import Response


def success_response(data, status_code=status.HTTP_200_OK):
    """Wrap a payload in the success envelope."""
    return Response({"status": "success", "data": data}, status=status_code)
