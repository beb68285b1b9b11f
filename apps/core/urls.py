from django.urls import path
from . import views

urlpatterns = [
    path('settings/', views.settings_collection, name='settings_collection'),
    path('settings/defaults/', views.settings_defaults, name='settings_defaults'),
    path('settings/reset/', views.settings_reset, name='settings_reset'),
    path('settings/export/', views.settings_export, name='settings_export'),
    path('settings/<str:key>/', views.setting_detail, name='setting_detail'),

    path('dashboard/layout/', views.dashboard_layout, name='dashboard_layout'),
    path('dashboard/layout/reset/', views.dashboard_layout_reset, name='dashboard_layout_reset'),
    path('dashboard/layouts/', views.dashboard_layouts, name='dashboard_layouts'),
    path('dashboard/layouts/<int:pk>/', views.dashboard_layout_delete, name='dashboard_layout_delete'),
    path('dashboard/layouts/<int:pk>/activate/', views.dashboard_layout_activate, name='dashboard_layout_activate'),
    path('dashboard/summary/', views.dashboard_summary, name='dashboard_summary'),
    path('dashboard/widget/<str:widget_id>/', views.dashboard_widget, name='dashboard_widget'),
]
