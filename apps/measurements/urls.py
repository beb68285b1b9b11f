from django.urls import path
from . import views

urlpatterns = [
    path('', views.measurement_collection, name='measurement_collection'),
    path('<int:pk>/', views.measurement_detail, name='measurement_detail'),
    path('<int:pk>/entries/', views.measurement_entries, name='measurement_entries'),
    path('<int:pk>/entries/<int:entry_id>/', views.measurement_entry_detail, name='measurement_entry_detail'),
    path('<int:pk>/targets/', views.measurement_targets, name='measurement_targets'),
    path('<int:pk>/targets/<int:target_id>/', views.measurement_target_detail, name='measurement_target_detail'),
    path('<int:pk>/graph-data/', views.measurement_graph_data, name='measurement_graph_data'),
    path('<int:pk>/progress/', views.measurement_progress, name='measurement_progress'),
]
