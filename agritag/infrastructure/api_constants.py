"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


# Document Store Endpoints
class DocumentStoreEndpoints:
    """Document store paths. Subjects live under their project."""

    PROJECTS = "/projects"
    PROJECT_BY_ID = "/projects/{project_id}"
    SUBJECTS = "/projects/{project_id}/{collection}"
    SUBJECT_BY_ID = "/projects/{project_id}/{collection}/{subject_id}"

    @classmethod
    def project(cls, project_id: str) -> str:
        """
        Get the path of a single project document.

        Args:
            project_id: Project ID

        Returns:
            Formatted endpoint path
        """
        return cls.PROJECT_BY_ID.format(project_id=project_id)

    @classmethod
    def subjects(cls, project_id: str, collection: str) -> str:
        """
        Get the path of a subject collection ("trees" or "animals").

        Args:
            project_id: Project ID
            collection: Collection name

        Returns:
            Formatted endpoint path
        """
        return cls.SUBJECTS.format(project_id=project_id, collection=collection)

    @classmethod
    def subject(cls, project_id: str, collection: str, subject_id: str) -> str:
        """
        Get the path of a single subject document.

        Args:
            project_id: Project ID
            collection: Collection name
            subject_id: Raw tag identifier of the subject

        Returns:
            Formatted endpoint path
        """
        return cls.SUBJECT_BY_ID.format(
            project_id=project_id,
            collection=collection,
            subject_id=subject_id,
        )


# OpenWeatherMap Endpoints
class WeatherEndpoints:
    """OpenWeatherMap endpoint paths."""

    CURRENT_WEATHER = "/data/2.5/weather"
    UNITS = "metric"


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT = 30.0
