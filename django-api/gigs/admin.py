from django.contrib import admin

from gigs.models import Artist, Booking, Event, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "role"]
    list_filter = ["role"]


@admin.register(Artist)
class ArtistAdmin(admin.ModelAdmin):
    list_display = ["name", "status", "hourly_rate", "minimum_hours", "travel_fees"]
    list_filter = ["status"]
    search_fields = ["name"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "venue", "date", "budget", "status"]
    list_filter = ["status"]
    search_fields = ["title", "venue"]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["id", "artist_id", "event_id", "status", "start_time", "end_time"]
    list_filter = ["status"]
    readonly_fields = ["status_history"]
