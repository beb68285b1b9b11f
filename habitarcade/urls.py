from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/', include('apps.core.urls')),
    path('api/', include('apps.habits.urls')),
    path('api/measurements/', include('apps.measurements.urls')),
    path('api/', include('apps.tasks.urls')),
]
