import os
from completeness_DAS import processing
from completeness_DAS.data_formatting import format_gap_report, daily_table

dataset = 'rainier'
mode = 'processing'    # processing or testing

settings = {
    'expected_per_day': 1440,   # one decimator file per minute
}
if mode=='testing':
    rootCountDir = r'C:\Users\ers334\Desktop\testingData'
elif mode=='processing':
    rootCountDir = r'/data/jbod1'

input_file = os.path.join(rootCountDir, dataset + '_count.txt')

# run gap check:
results = processing.check_data_gaps(
    input_file,
    settings=settings,
    verbose=True,
    log_dir=rootCountDir
)

print('\n'.join(format_gap_report(results['gaps'], results['summary'])))

summary = results['summary']
table = daily_table(results['file_counts'], summary['first_date'], summary['last_date'],
                    settings['expected_per_day'])
table.to_csv(os.path.join(rootCountDir, dataset + '_daily_completeness.csv'), index=False)
print(table.sort_values('missing', ascending=False).head(10))
