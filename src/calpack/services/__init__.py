"""Service layer: calendar operations returning :class:`ServiceResult`."""
