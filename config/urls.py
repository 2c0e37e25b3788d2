from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.http import HttpResponse


def healthz(_request):
    return HttpResponse("ok", content_type="text/plain")


urlpatterns = [
    path("admin/", admin.site.urls),
    path("healthz/", healthz),
    path("api/", include("apps.users.urls")),
    path("api/", include("apps.members.urls")),
    path("api/", include("apps.organization.urls")),
    path("api/", include("apps.receipts.urls")),
    path("api/", include("apps.treasury.urls")),
    path("api/", include("apps.fees.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
