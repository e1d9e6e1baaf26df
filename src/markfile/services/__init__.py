"""Service layer: pipeline operations wrapped in :class:`ServiceResult`."""
