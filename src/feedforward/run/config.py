import configparser
import os
from feedforward.activations import PhiType, DEFAULT_A, DEFAULT_K, DEFAULT_L

class Config:

    @staticmethod
    def _parse_activations(raw_activations):
        """
        Parse 'activations' from string to list of PhiType.

        Parameters:
            raw_activations: Either a comma-separated list of activation names
                             (one per layer, or a single one applied to every layer)
                             or already a list of names / PhiType values

        Returns:
            List of PhiType values
        """
        if isinstance(raw_activations, str):
            raw_activations = [opt.strip() for opt in raw_activations.split(',')]

        parsed = []
        for opt in raw_activations:
            try:
                parsed.append(PhiType(opt))
            except ValueError:
                raise ValueError(f"Invalid activation function '{opt}' in activations") from None
        return parsed

    @staticmethod
    def _parse_layer_sizes(raw_sizes):
        """Parse 'layer_sizes' from a comma-separated string to a list of ints."""
        if isinstance(raw_sizes, str):
            raw_sizes = [s.strip() for s in raw_sizes.split(',')]
        sizes = [int(s) for s in raw_sizes]
        if any(s <= 0 for s in sizes):
            raise ValueError(f"Layer sizes must be positive, got {sizes}")
        return sizes

    @staticmethod
    def _parse_report_interval(raw_interval):
        """Parse 'report_interval', which must be at least 1."""
        interval = int(raw_interval)
        if interval < 1:
            raise ValueError(f"'report_interval' must be at least 1, got {interval}")
        return interval

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.layer_sizes = [2, 2, 1]
            self.activations = 'sigmoid'
            self.phi_a = DEFAULT_A
            self.phi_k = DEFAULT_K
            self.phi_l = DEFAULT_L

            self.weight_init_mean  = 0.0
            self.weight_init_stdev = 1.0
            self.bias_init_mean    = 0.0
            self.bias_init_stdev   = 1.0
            self.min_weight = float('-inf')
            self.max_weight = float('inf')
            self.min_bias   = float('-inf')
            self.max_bias   = float('inf')

            self.learning_rate      = 0.1
            self.momentum           = 0.5
            self.annealing_strength = 0.0
            self.annealing_decay    = 1.0
            self.max_epochs         = 1000
            self.error_threshold    = None
            self.shuffle            = True
            self.report_interval    = 100
            self.num_jobs           = 1

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [NETWORK]

        # The number of network inputs followed by the number of neurons in
        # each layer, e.g. "2, 3, 1" is a 2-input network with a hidden layer
        # of 3 neurons and a single output neuron.
        self.layer_sizes = self._parse_layer_sizes(get_value('NETWORK', 'layer_sizes', str))

        # Activation function of each layer (comma-separated, one per layer).
        # A single name applies to every layer.
        # Options: see 'PhiType' in 'basic_activations.py'.
        self.activations = get_value('NETWORK', 'activations', str)

        # The shape parameters (a, k, l) used by the parametric activations.
        self.phi_a = get_value('NETWORK', 'phi_a', float, default=DEFAULT_A)
        self.phi_k = get_value('NETWORK', 'phi_k', float, default=DEFAULT_K)
        self.phi_l = get_value('NETWORK', 'phi_l', float, default=DEFAULT_L)

        # [INITIALIZATION]

        # The mean and standard deviation of the normal distributions
        # used to initialize the weights and biases of new networks.
        self.weight_init_mean  = get_value('INITIALIZATION', 'weight_init_mean' , float, default=0.0)
        self.weight_init_stdev = get_value('INITIALIZATION', 'weight_init_stdev', float, default=1.0)
        self.bias_init_mean    = get_value('INITIALIZATION', 'bias_init_mean'   , float, default=0.0)
        self.bias_init_stdev   = get_value('INITIALIZATION', 'bias_init_stdev'  , float, default=1.0)

        # The minimum and maximum allowed initial weights and biases.
        # Values outside this range will be clamped to this range.
        self.min_weight = get_value('INITIALIZATION', 'min_weight', float, default=float('-inf'))
        self.max_weight = get_value('INITIALIZATION', 'max_weight', float, default=float('inf'))
        self.min_bias   = get_value('INITIALIZATION', 'min_bias'  , float, default=float('-inf'))
        self.max_bias   = get_value('INITIALIZATION', 'max_bias'  , float, default=float('inf'))

        # [TRAINING]

        # Learning rate (eta) and momentum coefficient (mu) of the update rule:
        #     diff = eta * (-grad + mu * diff_prev + r)
        self.learning_rate = get_value('TRAINING', 'learning_rate', float, default=0.1)
        self.momentum      = get_value('TRAINING', 'momentum'     , float, default=0.5)

        # Standard deviation of the random term 'r' added to every update
        # (simulated-annealing-like noise). Use 0 to disable.
        self.annealing_strength = get_value('TRAINING', 'annealing_strength', float, default=0.0)

        # Factor applied to 'annealing_strength' after each epoch.
        self.annealing_decay = get_value('TRAINING', 'annealing_decay', float, default=1.0)

        # The maximum number of passes over the training examples.
        self.max_epochs = get_value('TRAINING', 'max_epochs', int)

        # Training stops once the mean squared error of an epoch is at or below
        # this threshold. Use "None" to always run 'max_epochs' epochs.
        self.error_threshold = get_value('TRAINING', 'error_threshold', float, default=None)

        # Whether to visit the training examples in a random order each epoch.
        self.shuffle = get_value('TRAINING', 'shuffle', bool, default=True)

        # Report progress every N epochs.
        self.report_interval = get_value('TRAINING', 'report_interval', int, default=100)

        # Number of threads used for the neurons of each layer (1 = serial, -1 = all cores).
        self.num_jobs = get_value('TRAINING', 'num_jobs', int, default=1)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse activations, layer sizes and the
        report interval when set.
        This allows users to write config.activations = "tanh, sigmoid" and have it
        automatically converted to the list of PhiType values.
        """
        if name == 'activations':
            value = self._parse_activations(value)
        elif name == 'layer_sizes':
            value = self._parse_layer_sizes(value)
        elif name == 'report_interval':
            value = self._parse_report_interval(value)
        super().__setattr__(name, value)
