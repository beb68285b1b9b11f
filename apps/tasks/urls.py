from django.urls import path
from . import views

urlpatterns = [
    path('tasks/', views.task_collection, name='task_collection'),
    path('tasks/<int:pk>/', views.task_detail, name='task_detail'),
    path('tasks/<int:pk>/restore/', views.task_restore, name='task_restore'),
    path('tasks/<int:pk>/complete/', views.task_complete, name='task_complete'),
    path('tasks/<int:pk>/reopen/', views.task_reopen, name='task_reopen'),

    path('projects/', views.project_collection, name='project_collection'),
    path('projects/<int:pk>/', views.project_detail, name='project_detail'),

    path('tags/', views.tag_collection, name='tag_collection'),
    path('tags/<int:pk>/', views.tag_detail, name='tag_detail'),
]
