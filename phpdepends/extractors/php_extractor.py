# phpdepends/extractors/php_extractor.py

import json
import os
from dataclasses import asdict

import chardet

from phpdepends.base.dependency_extractor import DependencyExtractor
from phpdepends.classifier.symbol_classifier import SymbolClassifier
from phpdepends.tokenizer.php_tokenizer import PhpTokenizer
from phpdepends.utils.dependency_set import DependencySet


def read_source(file_path: str) -> str:
    with open(file_path, "rb") as f:
        raw = f.read()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        guess = chardet.detect(raw)
        encoding = guess["encoding"] or "latin-1"
        try:
            return raw.decode(encoding, errors="replace")
        except LookupError:
            return raw.decode("latin-1")


def write_records(records, output_path: str):
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output_path, "w", encoding="utf8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)


class PhpDependencyExtractor(DependencyExtractor):
    def __init__(self, resolver):
        self.resolver = resolver
        self.tokenizer = PhpTokenizer()
        self.all_dependencies = []

    def process_source(self, code: str, file_path: str = "<string>") -> DependencySet:
        classifier = SymbolClassifier(self.resolver)
        deps = classifier.classify(self.tokenizer.tokenize(code))
        for res in classifier.resolutions:
            record = asdict(res)
            record["file_path"] = file_path
            self.all_dependencies.append(record)
        return deps

    def process_file(self, file_path: str) -> DependencySet:
        return self.process_source(read_source(file_path), file_path)

    def write_to_file(self, output_path: str):
        write_records(self.all_dependencies, output_path)

    def extract_all_dependencies(self):
        return self.all_dependencies
