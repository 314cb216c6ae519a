# -----------------------------------------------------------
# APP CONFIGURATION
# Every key can be overridden from the environment with a HUFFMAN_ prefix,
# e.g. HUFFMAN_FILTER_INPUT=true
# -----------------------------------------------------------

SAMPLE_TEXT = (
    "According to the chief technology officer from the company, the robots were "
    "controlled from a single mobile device and were built with a special encryption "
    "technology that would prevent interference from other devices in the area.\n"
    "\n"
    "This event took place at the Qingdao Beer Festival in Shandong, China, which is "
    "known as the Asian Oktoberfest, because if there’s one thing you want to show "
    "a very drunk person, it’s this many robots dancing."
)


class Config:
    # Run encode requests through the character filter unless the request says otherwise
    FILTER_INPUT = False
    # Upload limit for /compress_file and /decompress_file
    MAX_CONTENT_LENGTH = 1024 * 1024
    ALLOWED_EXTENSIONS = {"txt"}
    SAMPLE_TEXT = SAMPLE_TEXT
