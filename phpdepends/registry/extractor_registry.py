from phpdepends.extractors.php_extractor import PhpDependencyExtractor


def get_extractor(language: str, resolver):
    lang = language.lower()
    if lang == "php":
        return PhpDependencyExtractor(resolver)
    raise ValueError(f"No extractor for language: {language}")
