from abc import ABC, abstractmethod


class DependencyExtractor(ABC):
    @abstractmethod
    def process_file(self, file_path: str):
        pass

    @abstractmethod
    def process_source(self, code: str, file_path: str = "<string>"):
        pass

    @abstractmethod
    def write_to_file(self, output_path: str):
        pass

    @abstractmethod
    def extract_all_dependencies(self):
        pass
