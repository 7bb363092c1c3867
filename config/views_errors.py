from django.http import JsonResponse


def handler404(request, exception=None):
    return JsonResponse({"error": "Not found"}, status=404)


def handler500(request):
    return JsonResponse({"error": "Server error"}, status=500)
