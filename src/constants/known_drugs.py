DEFAULT_DICTIONARY = {
    "darzalex faspro": {"brand": "DARZALEX FASPRO", "generic": "Daratumumab and hyaluronidase-fihj"},
    "keytruda": {"brand": "KEYTRUDA", "generic": "Pembrolizumab"},
    "tecentriq": {"brand": "TECENTRIQ", "generic": "Atezolizumab"},
    "opdivo": {"brand": "OPDIVO", "generic": "Nivolumab"},
}

ALLOWED_LANGUAGES = ("ko", "ja", "zh-cn", "zh-tw")

LANGUAGE_LABELS = {
    "ko": "Korean",
    "ja": "Japanese",
    "zh-cn": "Chinese Simp",
    "zh-tw": "Chinese Trad",
}
