"""Dataset builder for batch generation of schema-conforming values.

Provides high-level interfaces for generating fixture datasets from a
schema with conformance validation, summary statistics, quality checks
and JSON / JSON Lines export.
"""

import numpy as np
import json
import logging
import time
import warnings
from pathlib import Path
from typing import List, Dict, Optional, Union, Any, Mapping
from dataclasses import dataclass, asdict
from datetime import datetime

from scipy import stats

from ..config.defaults import GenerationDefaults, GENERATION_PRESETS
from ..config.random_state import create_rng
from ..config.settings import Settings
from ..core.generator import SchemaGenerator
from ..core.uniqueness import freeze
from .conformance import check_conformance

logger = logging.getLogger(__name__)

# Categorical values are tallied only below this many distinct values
MAX_CATEGORIES = 50
# Issues kept in metadata per dataset
MAX_REPORTED_ISSUES = 20


@dataclass
class DatasetMetadata:
    """Metadata for generated datasets.

    Attributes
    ----------
    name : str
        Dataset name/identifier
    creation_time : str
        ISO timestamp of creation
    schema : Dict
        Schema the values were generated from
    defaults : Dict
        Generation fallbacks in effect
    value_stats : Dict
        Statistics about generated values
    validation_results : Dict
        Conformance results (and quality assessment when requested)
    seed : Optional[int]
        Seed used for generation, if any
    """
    name: str
    creation_time: str
    schema: Dict
    defaults: Dict
    value_stats: Dict
    validation_results: Dict
    seed: Optional[int] = None


@dataclass
class Dataset:
    """Generated values with their metadata."""
    values: List[Any]
    metadata: DatasetMetadata


def _json_type(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    return 'object'


def _summary(numbers: List[float]) -> Dict[str, float]:
    return {
        'mean': float(np.mean(numbers)),
        'std': float(np.std(numbers)),
        'min': float(np.min(numbers)),
        'max': float(np.max(numbers)),
        'median': float(np.median(numbers))
    }


def analyze_value_statistics(values: List[Any]) -> Dict[str, Any]:
    """
    Analyze statistical properties of generated values.

    Parameters
    ----------
    values : List[Any]
        Generated values to analyze

    Returns
    -------
    dict
        Type counts, uniqueness, numeric and length summaries, categorical
        tallies keyed by ``"<type>:<value>"`` and object property presence rates
    """
    if not values:
        return {'error': 'No values to analyze'}

    type_counts: Dict[str, int] = {}
    for value in values:
        kind = _json_type(value)
        type_counts[kind] = type_counts.get(kind, 0) + 1

    n_unique = len({freeze(value) for value in values})

    result: Dict[str, Any] = {
        'n_values': len(values),
        'type_counts': type_counts,
        'diversity_metrics': {
            'unique_values': n_unique,
            'unique_rate': n_unique / len(values)
        }
    }

    numbers = [v for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]
    if numbers:
        result['numeric_stats'] = _summary(numbers)

    lengths = [len(v) for v in values if isinstance(v, (str, list))]
    if lengths:
        result['length_stats'] = _summary(lengths)

    categorical = [v for v in values if isinstance(v, (str, bool))]
    if categorical:
        counts: Dict[str, int] = {}
        for value in categorical:
            key = f"{type(value).__name__}:{value if isinstance(value, str) else json.dumps(value)}"
            counts[key] = counts.get(key, 0) + 1
        if len(counts) <= MAX_CATEGORIES:
            result['category_counts'] = counts

    objects = [v for v in values if isinstance(v, dict)]
    if objects:
        presence: Dict[str, int] = {}
        for obj in objects:
            for key in obj:
                presence[key] = presence.get(key, 0) + 1
        result['property_presence'] = {key: count / len(objects) for key, count in presence.items()}

    return result


def validate_generated_values(schema: Mapping[str, Any],
                              values: List[Any],
                              defaults: Optional[GenerationDefaults] = None) -> Dict[str, Any]:
    """
    Check every value against the schema it was generated from.

    Returns
    -------
    dict
        ``n_values``, ``n_valid``, ``validation_rate`` and a sample of issues
    """
    n_valid = 0
    issues: List[str] = []

    for index, value in enumerate(values):
        value_issues = check_conformance(schema, value, defaults)
        if not value_issues:
            n_valid += 1
        elif len(issues) < MAX_REPORTED_ISSUES:
            issues.extend(f"[{index}] {issue}" for issue in value_issues)

    return {
        'n_values': len(values),
        'n_valid': n_valid,
        'validation_rate': n_valid / len(values) if values else 1.0,
        'issues': issues[:MAX_REPORTED_ISSUES]
    }


def validate_dataset_quality(dataset: Dataset,
                             quality_thresholds: Optional[Dict[str, float]] = None) -> Dict[str, Any]:
    """
    Validate dataset quality.

    Checks that every value conforms, that the dataset is not dominated by
    duplicates, and that categorical values (enum strings, booleans) are
    spread evenly according to a chi-square goodness-of-fit test.

    Parameters
    ----------
    dataset : Dataset
        Dataset to validate
    quality_thresholds : Optional[Dict[str, float]]
        Custom quality thresholds, or None for defaults

    Returns
    -------
    dict
        Quality validation results
    """
    thresholds = {
        'min_validation_rate': 1.0,
        'min_unique_rate': 0.0,
        'min_uniformity_pvalue': 0.001
    }
    if quality_thresholds:
        thresholds.update(quality_thresholds)

    results: Dict[str, Any] = {
        'overall_quality': 'unknown',
        'passed_checks': 0,
        'total_checks': 0,
        'issues': [],
        'warnings': [],
        'metrics': {}
    }

    validation = dataset.metadata.validation_results
    value_stats = dataset.metadata.value_stats

    results['total_checks'] += 1
    if validation['validation_rate'] >= thresholds['min_validation_rate']:
        results['passed_checks'] += 1
    else:
        results['issues'].append(f"Low validation rate: {validation['validation_rate']:.3f}")
    results['metrics']['validation_rate'] = validation['validation_rate']

    if 'diversity_metrics' in value_stats:
        unique_rate = value_stats['diversity_metrics']['unique_rate']
        results['total_checks'] += 1
        if unique_rate >= thresholds['min_unique_rate']:
            results['passed_checks'] += 1
        else:
            results['warnings'].append(f"Low value diversity: {unique_rate:.3f}")
        results['metrics']['unique_rate'] = unique_rate

    counts = value_stats.get('category_counts', {})
    if len(counts) >= 2:
        observed = np.array(list(counts.values()), dtype=float)
        _, p_value = stats.chisquare(observed)
        results['total_checks'] += 1
        if p_value >= thresholds['min_uniformity_pvalue']:
            results['passed_checks'] += 1
        else:
            results['warnings'].append(f"Uneven categorical distribution (p={p_value:.2e})")
        results['metrics']['uniformity_pvalue'] = float(p_value)

    pass_rate = results['passed_checks'] / results['total_checks']
    if pass_rate == 1.0:
        results['overall_quality'] = 'excellent'
    elif not results['issues']:
        results['overall_quality'] = 'good'
    else:
        results['overall_quality'] = 'poor'
    results['metrics']['pass_rate'] = pass_rate

    return results


class DatasetBuilder:
    """Builder class for creating and managing generated datasets."""

    def __init__(self,
                 workspace_dir: Optional[Union[str, Path]] = None,
                 settings: Optional[Settings] = None):
        """
        Initialize dataset builder.

        Parameters
        ----------
        workspace_dir : Optional[Union[str, Path]]
            Directory for saving datasets, or None for ``settings.output_dir``
        settings : Optional[Settings]
            Generation settings, or None for the standard preset
        """
        self.settings = settings or Settings()
        self.workspace_dir = Path(workspace_dir or self.settings.output_dir)
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

        self.created_datasets: List[str] = []

    def create_dataset(self,
                       schema: Mapping[str, Any],
                       n_values: Optional[int] = None,
                       name: Optional[str] = None,
                       seed: Optional[int] = None,
                       settings: Optional[Settings] = None,
                       validate_quality: bool = True) -> Dataset:
        """
        Generate a dataset from a schema.

        Parameters
        ----------
        schema : Mapping
            Schema every value is generated from
        n_values : Optional[int]
            Number of values, or None for ``settings.n_samples``
        name : Optional[str]
            Dataset name, or None for auto-generated
        seed : Optional[int]
            Seed for this dataset, or None for ``settings.random_seed``
        settings : Optional[Settings]
            Overrides the builder's settings for this dataset
        validate_quality : bool
            Whether to perform quality validation

        Returns
        -------
        Dataset
            Values with metadata
        """
        settings = settings or self.settings
        n_values = settings.n_samples if n_values is None else n_values
        seed = settings.random_seed if seed is None else seed
        if name is None:
            name = f"dataset_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        defaults = settings.to_defaults()
        generator = SchemaGenerator(rng=create_rng(seed), defaults=defaults)

        logger.debug("Generating %d value(s) for dataset %s", n_values, name)
        values = generator.generate_many(schema, n_values)

        metadata = DatasetMetadata(
            name=name,
            creation_time=datetime.now().isoformat(),
            schema=dict(schema),
            defaults=asdict(defaults),
            value_stats=analyze_value_statistics(values),
            validation_results=validate_generated_values(schema, values, defaults),
            seed=seed
        )
        dataset = Dataset(values=values, metadata=metadata)

        if validate_quality:
            quality_results = validate_dataset_quality(dataset)
            dataset.metadata.validation_results['quality_assessment'] = quality_results

            if quality_results['overall_quality'] == 'poor':
                warnings.warn(f"Dataset quality is poor: {quality_results['issues']}")

        self.created_datasets.append(name)
        return dataset

    def create_from_preset(self,
                           schema: Mapping[str, Any],
                           preset_name: str,
                           n_values: Optional[int] = None,
                           name: Optional[str] = None) -> Dataset:
        """
        Create dataset using a preset's generation defaults.

        Raises
        ------
        ValueError
            If ``preset_name`` is unknown
        """
        preset = Settings.from_preset(preset_name).update(
            n_samples=self.settings.n_samples,
            output_dir=self.settings.output_dir,
            random_seed=self.settings.random_seed
        )

        if name is None:
            name = f"{preset_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        return self.create_dataset(schema, n_values, name, settings=preset)

    def create_batch_datasets(self,
                              schema: Mapping[str, Any],
                              variations: List[Dict[str, Any]],
                              n_values: Optional[int] = None,
                              name_prefix: str = "batch") -> List[Dataset]:
        """
        Create multiple datasets with systematic settings variations.

        Parameters
        ----------
        schema : Mapping
            Schema shared by every dataset
        variations : List[Dict[str, Any]]
            Settings fields to override per dataset; unknown fields are
            skipped with a warning
        n_values : Optional[int]
            Values per dataset
        name_prefix : str
            Prefix for dataset names

        Returns
        -------
        List[Dataset]
            List of generated datasets
        """
        known_fields = set(asdict(self.settings))
        datasets = []

        for i, variation in enumerate(variations):
            overrides = {}
            for key, value in variation.items():
                if key in known_fields:
                    overrides[key] = value
                else:
                    warnings.warn(f"Unknown settings parameter: {key}")

            name = f"{name_prefix}_{i:03d}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
            datasets.append(self.create_dataset(schema, n_values, name,
                                                settings=self.settings.update(**overrides),
                                                validate_quality=False))

        return datasets

    def save_dataset(self, dataset: Dataset, format: str = 'json') -> Path:
        """
        Save dataset to file.

        Parameters
        ----------
        dataset : Dataset
            Dataset to save
        format : str
            'json' (values and metadata in one document) or 'jsonl' (one
            value per line, metadata in a ``.meta.json`` sidecar)

        Returns
        -------
        Path
            Path to saved file
        """
        filepath = self.workspace_dir / f"{dataset.metadata.name}.{format}"

        if format == 'json':
            data = {
                'values': dataset.values,
                'metadata': asdict(dataset.metadata)
            }
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

        elif format == 'jsonl':
            with open(filepath, 'w', encoding='utf-8') as f:
                for value in dataset.values:
                    f.write(json.dumps(value) + "\n")
            sidecar = filepath.with_suffix('.meta.json')
            with open(sidecar, 'w', encoding='utf-8') as f:
                json.dump(asdict(dataset.metadata), f, indent=2)

        else:
            raise ValueError(f"Unknown format: {format}")

        logger.info("Saved dataset %s to %s", dataset.metadata.name, filepath)
        return filepath

    def load_dataset(self, filepath: Union[str, Path]) -> Dataset:
        """
        Load dataset from file.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to a ``.json`` or ``.jsonl`` dataset file

        Returns
        -------
        Dataset
            Loaded dataset
        """
        filepath = Path(filepath)

        if filepath.suffix == '.json':
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return Dataset(values=data['values'], metadata=DatasetMetadata(**data['metadata']))

        if filepath.suffix == '.jsonl':
            with open(filepath, 'r', encoding='utf-8') as f:
                values = [json.loads(line) for line in f if line.strip()]
            sidecar = filepath.with_suffix('.meta.json')
            with open(sidecar, 'r', encoding='utf-8') as f:
                metadata = DatasetMetadata(**json.load(f))
            return Dataset(values=values, metadata=metadata)

        raise ValueError(f"Cannot load format: {filepath.suffix}")

    def list_presets(self) -> Dict[str, Dict[str, Any]]:
        """List available generation presets."""
        return {name: asdict(defaults) for name, defaults in GENERATION_PRESETS.items()}

    def benchmark_performance(self,
                              schema: Mapping[str, Any],
                              n_values: int = 1000,
                              n_trials: int = 3) -> Dict[str, Any]:
        """
        Benchmark generation throughput for a schema.

        Returns
        -------
        dict
            Timing summary and values per second
        """
        generator = SchemaGenerator(rng=create_rng(self.settings.random_seed),
                                    defaults=self.settings.to_defaults())
        times = []

        for _ in range(n_trials):
            start_time = time.perf_counter()
            generator.generate_many(schema, n_values)
            times.append(time.perf_counter() - start_time)

        mean_time = float(np.mean(times))
        return {
            'n_values': n_values,
            'timing': {
                'mean_seconds': mean_time,
                'std_seconds': float(np.std(times)),
                'min_seconds': min(times),
                'max_seconds': max(times)
            },
            'throughput': {
                'values_per_second': n_values / mean_time if mean_time > 0 else float('inf')
            }
        }

    def get_workspace_summary(self) -> Dict[str, Any]:
        """Get summary of workspace and created datasets."""
        return {
            'workspace_dir': str(self.workspace_dir),
            'created_datasets': self.created_datasets,
            'available_presets': list(GENERATION_PRESETS.keys())
        }
