"""FitTrack: a personal fitness tracking API."""
