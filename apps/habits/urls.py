from django.urls import path
from . import views

urlpatterns = [
    path('habits/', views.habit_collection, name='habit_collection'),
    path('habits/today/', views.habit_today, name='habit_today'),
    path('habits/import/', views.habit_import, name='habit_import'),
    path('habits/auto-fill-missed/', views.habits_auto_fill, name='habits_auto_fill'),
    path('habits/<int:pk>/', views.habit_detail, name='habit_detail'),
    path('habits/<int:pk>/restore/', views.habit_restore, name='habit_restore'),
    path('habits/<int:pk>/entries/', views.habit_entries, name='habit_entries'),
    path('habits/<int:pk>/auto-fill-missed/', views.habit_auto_fill, name='habit_auto_fill'),
    path('habits/<int:pk>/streak/', views.habit_streak, name='habit_streak'),

    path('categories/', views.category_collection, name='category_collection'),
    path('categories/<int:pk>/', views.category_detail, name='category_detail'),
    path('categories/<int:pk>/restore/', views.category_restore, name='category_restore'),
]
