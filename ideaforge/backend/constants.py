MAX_REQUEST_BYTES = 1024 * 1024  # 1 MiB of JSON is far beyond any valid idea + pitch
MIN_IDEA_CHARS = 10
MAX_IDEA_CHARS = 2000
MAX_QUICK_IDEA_CHARS = 500
MIN_SLIDES = 3
MAX_SLIDES = 5
SLIDE_CONTEXT_CHARS = 200
LOG_PREVIEW_CHARS = 50
MAX_MEMORY_PITCHES = 500
